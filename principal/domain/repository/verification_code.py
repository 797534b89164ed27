"""Verification code repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from principal.domain.model.verification_code import VerificationCode
from principal.domain.value import UserId, VerificationCodeId


class VerificationCodeRepository(ABC):
    """Repository for VerificationCode entity."""

    @abstractmethod
    async def issue(
        self, user_id: UserId, code: str, issued_at: datetime, expires_at: datetime
    ) -> VerificationCode:
        """Store a new code for a user, invalidating any unconsumed one.

        Args:
            user_id: Owner of the code
            code: Opaque token
            issued_at: Issue time
            expires_at: Time after which the code is no longer accepted

        Returns:
            The stored code
        """
        pass

    @abstractmethod
    async def find_active(
        self, user_id: UserId, now: datetime
    ) -> VerificationCode | None:
        """Find the user's unconsumed, unexpired code.

        Args:
            user_id: Owner of the code
            now: Reference time for expiry

        Returns:
            The active code if any, None otherwise
        """
        pass

    @abstractmethod
    async def consume(self, code_id: VerificationCodeId, consumed_at: datetime) -> bool:
        """Mark a code consumed if it has not been already.

        Args:
            code_id: Code to consume
            consumed_at: Consumption time

        Returns:
            True if this call consumed the code, False if it was already consumed
            or does not exist
        """
        pass

    @abstractmethod
    async def mark_sent(self, code_id: VerificationCodeId, sent_at: datetime) -> bool:
        """Record that a code was delivered by email.

        Args:
            code_id: Code that was sent
            sent_at: Delivery time

        Returns:
            True if the code still exists and was updated
        """
        pass
