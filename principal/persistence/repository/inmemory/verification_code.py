"""In-memory verification code repository for testing."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from principal.domain.model.verification_code import VerificationCode
from principal.domain.repository.verification_code import VerificationCodeRepository
from principal.domain.value import UserId, VerificationCodeId


class InMemoryVerificationCodeRepository(VerificationCodeRepository):
    """In-memory implementation of VerificationCodeRepository for testing."""

    def __init__(self) -> None:
        self._codes: dict[VerificationCodeId, VerificationCode] = {}

    async def issue(
        self, user_id: UserId, code: str, issued_at: datetime, expires_at: datetime
    ) -> VerificationCode:
        """Replace the user's unconsumed code with a new one."""
        stale = [
            existing.id
            for existing in self._codes.values()
            if existing.user_id == user_id and existing.consumed_at is None
        ]
        for code_id in stale:
            del self._codes[code_id]

        verification_code = VerificationCode(
            id=VerificationCodeId(uuid4()),
            user_id=user_id,
            code=code,
            issued_at=issued_at,
            expires_at=expires_at,
        )
        self._codes[verification_code.id] = verification_code
        return verification_code

    async def find_active(
        self, user_id: UserId, now: datetime
    ) -> Optional[VerificationCode]:
        """Find the user's unconsumed, unexpired code."""
        for code in self._codes.values():
            if code.user_id == user_id and code.is_active(now):
                return code
        return None

    async def consume(self, code_id: VerificationCodeId, consumed_at: datetime) -> bool:
        """Mark a code consumed unless it already is."""
        code = self._codes.get(code_id)
        if code is None or code.consumed_at is not None:
            return False
        self._codes[code_id] = code.model_copy(update={"consumed_at": consumed_at})
        return True

    async def mark_sent(self, code_id: VerificationCodeId, sent_at: datetime) -> bool:
        """Record delivery time on a stored code."""
        code = self._codes.get(code_id)
        if code is None:
            return False
        self._codes[code_id] = code.model_copy(update={"sent_at": sent_at})
        return True

    def all_for_user(self, user_id: UserId) -> list[VerificationCode]:
        """Every stored code for a user, consumed ones included."""
        return [code for code in self._codes.values() if code.user_id == user_id]
