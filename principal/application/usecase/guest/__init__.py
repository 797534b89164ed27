"""Guest use cases."""

from principal.application.usecase.guest.provision_guest import (
    ProvisionGuestRequest,
    ProvisionGuestResponse,
    ProvisionGuestUseCase,
)
from principal.application.usecase.guest.send_verification_email import (
    SendGuestVerificationEmailRequest,
    SendGuestVerificationEmailResponse,
    SendGuestVerificationEmailUseCase,
)
from principal.application.usecase.guest.verify_guest import (
    VerifyGuestRequest,
    VerifyGuestResponse,
    VerifyGuestUseCase,
)

__all__ = [
    "ProvisionGuestRequest",
    "ProvisionGuestResponse",
    "ProvisionGuestUseCase",
    "SendGuestVerificationEmailRequest",
    "SendGuestVerificationEmailResponse",
    "SendGuestVerificationEmailUseCase",
    "VerifyGuestRequest",
    "VerifyGuestResponse",
    "VerifyGuestUseCase",
]
