"""Resend guest verification email use case."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import logfire
from pydantic import BaseModel

from principal.application.usecase.base import BaseUseCase
from principal.config import Settings
from principal.domain.service import GuestUserService, VerificationEmailService
from principal.domain.value import (
    DispatchVerificationResult,
    EmailAddress,
    SendVerificationEmailResponseCode,
    TenantId,
)

_DISPATCH_CODES = {
    DispatchVerificationResult.SUCCESS: SendVerificationEmailResponseCode.SUCCESS,
    DispatchVerificationResult.EMAIL_SEND_FAILED: SendVerificationEmailResponseCode.EMAIL_SEND_FAILED,
    DispatchVerificationResult.PERSISTENCE_FAILED: SendVerificationEmailResponseCode.FAILED,
}


class SendGuestVerificationEmailRequest(BaseModel):
    """Request for a fresh verification email."""

    email: str
    first_name: str | None = None
    redirect_url: str | None = None
    tenant_id: UUID | None = None


class SendGuestVerificationEmailResponse(BaseModel):
    """Resend outcome."""

    result_code: SendVerificationEmailResponseCode


class SendGuestVerificationEmailUseCase(BaseUseCase):
    """Use case for sending a guest another verification email.

    Issuing a new code invalidates the previous one. Requests within the
    resend cooldown of the last successfully sent email are refused; a code
    whose email never went out does not hold the guest back.
    """

    def __init__(
        self,
        guest_user_service: GuestUserService,
        verification_email_service: VerificationEmailService,
        settings: Settings,
    ) -> None:
        """Initialize resend use case.

        Args:
            guest_user_service: Guest user domain service
            verification_email_service: Verification dispatch domain service
            settings: Application settings
        """
        self.guest_user_service = guest_user_service
        self.verification_email_service = verification_email_service
        self.settings = settings

    async def execute(
        self, request: SendGuestVerificationEmailRequest
    ) -> SendGuestVerificationEmailResponse:
        with logfire.span("send_verification_email.execute", email=request.email):
            try:
                result = await self._send(request)
            except Exception as e:
                logfire.error(
                    "Resending verification email failed",
                    email=request.email,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                result = SendVerificationEmailResponseCode.FAILED
            return SendGuestVerificationEmailResponse(result_code=result)

    async def _send(
        self, request: SendGuestVerificationEmailRequest
    ) -> SendVerificationEmailResponseCode:
        try:
            email = EmailAddress(request.email).root
        except ValueError:
            return SendVerificationEmailResponseCode.INVALID_EMAIL

        tenant_id = TenantId(request.tenant_id) if request.tenant_id else None
        user = await self.guest_user_service.find_by_email(email, tenant_id)
        if user is None or not user.is_guest:
            return SendVerificationEmailResponseCode.USER_NOT_FOUND
        if user.is_locked:
            return SendVerificationEmailResponseCode.USER_IS_LOCKED
        if user.email_verified:
            return SendVerificationEmailResponseCode.EMAIL_ALREADY_VERIFIED

        cooldown = timedelta(seconds=self.settings.verification.resend_cooldown_seconds)
        active = await self.verification_email_service.get_active_code(user.id)
        if (
            active is not None
            and active.sent_at is not None
            and datetime.now(timezone.utc) - active.sent_at < cooldown
        ):
            logfire.info(
                "Verification email recently sent",
                user_id=str(user.id),
                sent_at=active.sent_at.isoformat(),
            )
            return SendVerificationEmailResponseCode.EMAIL_RECENTLY_SENT

        dispatch = await self.verification_email_service.dispatch_verification(
            user.id,
            user.email,
            request.first_name or user.first_name,
            request.redirect_url,
        )
        return _DISPATCH_CODES[dispatch]
