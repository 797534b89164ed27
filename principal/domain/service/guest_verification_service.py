"""Guest verification domain service.

Verification state machine
==========================

    PENDING_VERIFICATION -> VERIFIED   (correct code)
    PENDING_VERIFICATION -> LOCKED     (max_failed_attempts wrong codes)
    PENDING_VERIFICATION -> PENDING_VERIFICATION  (wrong code, counter + 1)

VERIFIED and LOCKED are terminal. Every transition is written with a
compare-and-set on the user's version, so two concurrent submissions can
neither both win nor under-count failed attempts; the loser re-reads and
evaluates again.
"""

import secrets
from datetime import datetime, timezone

import logfire

from principal.domain.error import ConcurrencyConflictError
from principal.domain.model.user import GuestUser
from principal.domain.repository import UserRepository, VerificationCodeRepository
from principal.domain.value import EmailAddress, TenantId, VerifyGuestResponseCode

from .base import Service


class GuestVerificationService(Service):
    """Validates submitted verification codes and applies lockout policy."""

    def __init__(
        self,
        user_repository: UserRepository,
        verification_code_repository: VerificationCodeRepository,
        max_failed_attempts: int,
        max_conflict_retries: int = 3,
    ) -> None:
        """Initialize guest verification service.

        Args:
            user_repository: User repository
            verification_code_repository: Verification code repository
            max_failed_attempts: Wrong submissions that lock the account
            max_conflict_retries: Re-evaluations allowed after losing a
                concurrent write
        """
        self.user_repository = user_repository
        self.verification_code_repository = verification_code_repository
        self.max_failed_attempts = max_failed_attempts
        self.max_conflict_retries = max_conflict_retries

    async def verify_guest(
        self,
        email: str,
        submitted_code: str,
        tenant_id: TenantId | None = None,
    ) -> VerifyGuestResponseCode:
        """Check a submitted code and advance the account's state.

        Args:
            email: Guest email address
            submitted_code: Code from the verification link
            tenant_id: Optional tenant to scope the user lookup

        Returns:
            Verification result code
        """
        with logfire.span("guest_verification_service.verify_guest", email=email):
            try:
                normalized = EmailAddress(email).root
            except ValueError:
                return VerifyGuestResponseCode.INVALID_EMAIL

            for attempt in range(1, self.max_conflict_retries + 1):
                try:
                    return await self._evaluate(normalized, submitted_code, tenant_id)
                except ConcurrencyConflictError:
                    logfire.warn(
                        "Verification lost a concurrent update, retrying",
                        email=normalized,
                        attempt=attempt,
                    )

            logfire.error(
                "Verification abandoned after repeated conflicts",
                email=normalized,
                retries=self.max_conflict_retries,
            )
            return VerifyGuestResponseCode.FAILED

    async def _evaluate(
        self, email: str, submitted_code: str, tenant_id: TenantId | None
    ) -> VerifyGuestResponseCode:
        user = await self.user_repository.find_by_email(email, tenant_id)
        if user is None:
            logfire.info("Verification for unknown user", email=email)
            return VerifyGuestResponseCode.SUCCESS_NO_USER

        if user.is_locked:
            return VerifyGuestResponseCode.USER_IS_LOCKED

        if not user.is_guest:
            return VerifyGuestResponseCode.INVALID_NOT_GUEST

        if user.email_verified:
            return VerifyGuestResponseCode.SUCCESS

        now = datetime.now(timezone.utc)
        active = await self.verification_code_repository.find_active(user.id, now)
        if active is None:
            logfire.info("No active verification code", user_id=str(user.id))
            return VerifyGuestResponseCode.EMAIL_VERIFICATION_NEEDED

        if not secrets.compare_digest(
            active.code.encode("utf-8"), submitted_code.encode("utf-8")
        ):
            return await self._record_failed_attempt(user)

        await self.user_repository.update(
            user.model_copy(
                update={"email_verified": True, "failed_verification_attempts": 0}
            )
        )
        if not await self.verification_code_repository.consume(active.id, now):
            logfire.warn(
                "Verification code was already consumed",
                user_id=str(user.id),
                code_id=str(active.id),
            )

        logfire.info("Guest email verified", user_id=str(user.id))
        return VerifyGuestResponseCode.SUCCESS

    async def _record_failed_attempt(self, user: GuestUser) -> VerifyGuestResponseCode:
        attempts = user.failed_verification_attempts + 1
        locked = attempts >= self.max_failed_attempts
        await self.user_repository.update(
            user.model_copy(
                update={"failed_verification_attempts": attempts, "is_locked": locked}
            )
        )

        if locked:
            logfire.warn(
                "Guest locked after failed verification attempts",
                user_id=str(user.id),
                attempts=attempts,
            )
            return VerifyGuestResponseCode.USER_IS_LOCKED

        logfire.info(
            "Invalid verification code",
            user_id=str(user.id),
            attempts=attempts,
        )
        return VerifyGuestResponseCode.INVALID_CODE
