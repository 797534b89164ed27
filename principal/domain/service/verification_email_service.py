"""Email verification dispatch domain service."""

import secrets
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

import logfire

from principal.domain.error import EmailDeliveryError
from principal.domain.model.verification_code import VerificationCode
from principal.domain.repository import VerificationCodeRepository
from principal.domain.value import DispatchVerificationResult, UserId

from .base import Service


class EmailSender(ABC):
    """Outbound email port used to deliver verification codes."""

    @abstractmethod
    async def send_verification_email(
        self, email: str, first_name: str, code: str, redirect_url: str | None
    ) -> None:
        """Send a verification email.

        Args:
            email: Recipient address
            first_name: Recipient first name for the greeting
            code: Verification code to embed in the link
            redirect_url: Optional client route to return to after verifying

        Raises:
            EmailDeliveryError: If the message could not be delivered
        """
        pass


class VerificationEmailService(Service):
    """Issues verification codes and sends them to prospective guests."""

    def __init__(
        self,
        verification_code_repository: VerificationCodeRepository,
        email_sender: EmailSender,
        code_ttl: timedelta,
        code_bytes: int = 24,
    ) -> None:
        """Initialize verification email service.

        Args:
            verification_code_repository: Verification code repository
            email_sender: Outbound email port
            code_ttl: Lifetime of an issued code
            code_bytes: Random bytes per code
        """
        self.verification_code_repository = verification_code_repository
        self.email_sender = email_sender
        self.code_ttl = code_ttl
        self.code_bytes = code_bytes

    async def dispatch_verification(
        self,
        user_id: UserId,
        email: str,
        first_name: str,
        redirect_url: str | None = None,
    ) -> DispatchVerificationResult:
        """Issue a fresh code for a user and email it.

        Any previously issued code stops being accepted. The code's
        ``sent_at`` is only recorded when delivery succeeds.

        Args:
            user_id: Owner of the code
            email: Recipient address
            first_name: Recipient first name
            redirect_url: Optional client route for the verification link

        Returns:
            SUCCESS, EMAIL_SEND_FAILED when the code is stored but delivery
            failed, or PERSISTENCE_FAILED when the code could not be stored
        """
        with logfire.span(
            "verification_email_service.dispatch_verification",
            user_id=str(user_id),
            email=email,
        ):
            now = datetime.now(timezone.utc)
            try:
                issued = await self.verification_code_repository.issue(
                    user_id, self._generate_code(), now, now + self.code_ttl
                )
            except Exception as e:
                logfire.error(
                    "Failed to store verification code",
                    user_id=str(user_id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                return DispatchVerificationResult.PERSISTENCE_FAILED

            try:
                await self.email_sender.send_verification_email(
                    email, first_name, issued.code, redirect_url
                )
            except EmailDeliveryError as e:
                logfire.error(
                    "Sending guest verification email failed",
                    user_id=str(user_id),
                    email=email,
                    error=str(e),
                )
                return DispatchVerificationResult.EMAIL_SEND_FAILED

            # The email is out; a lost timestamp only relaxes the resend cooldown
            try:
                await self.verification_code_repository.mark_sent(
                    issued.id, datetime.now(timezone.utc)
                )
            except Exception as e:
                logfire.warn(
                    "Could not record verification email send time",
                    user_id=str(user_id),
                    error=str(e),
                )

            logfire.info(
                "Verification email sent",
                user_id=str(user_id),
                expires_at=issued.expires_at.isoformat(),
            )
            return DispatchVerificationResult.SUCCESS

    async def get_active_code(self, user_id: UserId) -> VerificationCode | None:
        """Get the user's currently accepted code, if any."""
        return await self.verification_code_repository.find_active(
            user_id, datetime.now(timezone.utc)
        )

    def _generate_code(self) -> str:
        """Generate a cryptographically secure, URL-safe code."""
        return secrets.token_urlsafe(self.code_bytes)
