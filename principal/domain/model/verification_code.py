"""Verification code entity."""

from datetime import datetime

from principal.domain.model.common import DomainModel
from principal.domain.value import UserId, VerificationCodeId


class VerificationCode(DomainModel):
    """Short-lived opaque token proving control of an email address.

    At most one active (unconsumed, unexpired) code exists per user; issuing
    a new one invalidates the previous. ``sent_at`` is set once the code
    has actually been delivered by email.
    """

    id: VerificationCodeId
    user_id: UserId
    code: str
    issued_at: datetime
    expires_at: datetime
    consumed_at: datetime | None = None
    sent_at: datetime | None = None

    def is_active(self, now: datetime) -> bool:
        return self.consumed_at is None and now < self.expires_at
