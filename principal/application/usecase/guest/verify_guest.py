"""Verify guest use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from principal.application.usecase.base import BaseUseCase
from principal.domain.service import GuestVerificationService
from principal.domain.value import TenantId, VerifyGuestResponseCode


class VerifyGuestRequest(BaseModel):
    """Verification code submission."""

    email: str
    code: str
    tenant_id: UUID | None = None


class VerifyGuestResponse(BaseModel):
    """Verification outcome."""

    result_code: VerifyGuestResponseCode


class VerifyGuestUseCase(BaseUseCase):
    """Use case for confirming a guest's email address."""

    def __init__(self, guest_verification_service: GuestVerificationService) -> None:
        self.guest_verification_service = guest_verification_service

    async def execute(self, request: VerifyGuestRequest) -> VerifyGuestResponse:
        with logfire.span("verify_guest.execute", email=request.email):
            tenant_id = TenantId(request.tenant_id) if request.tenant_id else None
            try:
                result = await self.guest_verification_service.verify_guest(
                    request.email, request.code, tenant_id
                )
            except Exception as e:
                logfire.error(
                    "Guest verification failed",
                    email=request.email,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                result = VerifyGuestResponseCode.FAILED
            return VerifyGuestResponse(result_code=result)
