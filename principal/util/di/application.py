"""Application layer DI providers."""

from dishka import Scope, provide

from principal.application.usecase.guest import (
    ProvisionGuestUseCase,
    SendGuestVerificationEmailUseCase,
    VerifyGuestUseCase,
)
from principal.application.usecase.user import CheckSuperAdminUseCase
from principal.config import Settings
from principal.domain.service import (
    GuestUserService,
    GuestVerificationService,
    InvitationService,
    SuperAdminService,
    VerificationEmailService,
)
from principal.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Guest use cases
    @provide(scope=Scope.REQUEST)
    def get_provision_guest_use_case(
        self,
        invitation_service: InvitationService,
        guest_user_service: GuestUserService,
        verification_email_service: VerificationEmailService,
        settings: Settings,
    ) -> ProvisionGuestUseCase:
        """Provide provision guest use case."""
        return ProvisionGuestUseCase(
            invitation_service=invitation_service,
            guest_user_service=guest_user_service,
            verification_email_service=verification_email_service,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_verify_guest_use_case(
        self, guest_verification_service: GuestVerificationService
    ) -> VerifyGuestUseCase:
        """Provide verify guest use case."""
        return VerifyGuestUseCase(guest_verification_service=guest_verification_service)

    @provide(scope=Scope.REQUEST)
    def get_send_guest_verification_email_use_case(
        self,
        guest_user_service: GuestUserService,
        verification_email_service: VerificationEmailService,
        settings: Settings,
    ) -> SendGuestVerificationEmailUseCase:
        """Provide resend verification email use case."""
        return SendGuestVerificationEmailUseCase(
            guest_user_service=guest_user_service,
            verification_email_service=verification_email_service,
            settings=settings,
        )

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_check_super_admin_use_case(
        self, super_admin_service: SuperAdminService
    ) -> CheckSuperAdminUseCase:
        """Provide super-admin check use case."""
        return CheckSuperAdminUseCase(super_admin_service=super_admin_service)
