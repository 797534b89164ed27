"""Guest registration and verification routes.

Business outcomes are reported as result codes with HTTP 200; only malformed
request bodies produce 4xx responses.
"""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from principal.application.usecase.guest import (
    ProvisionGuestRequest,
    ProvisionGuestResponse,
    ProvisionGuestUseCase,
    SendGuestVerificationEmailRequest,
    SendGuestVerificationEmailResponse,
    SendGuestVerificationEmailUseCase,
    VerifyGuestRequest,
    VerifyGuestResponse,
    VerifyGuestUseCase,
)

router = APIRouter(prefix="/guests", tags=["guests"], route_class=DishkaRoute)


@router.post("", response_model=ProvisionGuestResponse)
async def provision_guest(
    request: ProvisionGuestRequest,
    provision_guest_use_case: FromDishka[ProvisionGuestUseCase],
) -> ProvisionGuestResponse:
    """Register an invited guest and send the verification email."""
    return await provision_guest_use_case.execute(request)


@router.post("/verify", response_model=VerifyGuestResponse)
async def verify_guest(
    request: VerifyGuestRequest,
    verify_guest_use_case: FromDishka[VerifyGuestUseCase],
) -> VerifyGuestResponse:
    """Submit a verification code."""
    return await verify_guest_use_case.execute(request)


@router.post("/verification-email", response_model=SendGuestVerificationEmailResponse)
async def send_verification_email(
    request: SendGuestVerificationEmailRequest,
    send_verification_email_use_case: FromDishka[SendGuestVerificationEmailUseCase],
) -> SendGuestVerificationEmailResponse:
    """Send the guest a fresh verification email."""
    return await send_verification_email_use_case.execute(request)
