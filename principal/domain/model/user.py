"""Guest user aggregate root.

Guests are accounts created through a tenant invitation rather than
self-service signup. They must verify their email before activation.
"""

from datetime import datetime, timezone

from pydantic import Field

from principal.domain.model.common import DomainModel
from principal.domain.value import (
    SUPER_ADMIN_GROUP_ID,
    GroupId,
    LicenseType,
    TenantId,
    UserId,
    UserState,
    UserType,
)


class GuestUser(DomainModel):
    """User record as held by the user store.

    The store is shared with enterprise accounts, so ``user_type`` tells
    guests apart. ``version`` is the optimistic concurrency token: every
    successful update increments it, and updates carrying a stale version
    are rejected.
    """

    id: UserId
    email: str
    username: str
    first_name: str
    last_name: str
    tenant_id: TenantId
    group_ids: frozenset[GroupId] = frozenset()
    user_type: UserType = UserType.GUEST
    license_type: LicenseType | None = None
    password_hash: str | None = None
    email_verified: bool = False
    is_locked: bool = False
    failed_verification_attempts: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = Field(default=0, ge=0)

    @property
    def is_guest(self) -> bool:
        return self.user_type == UserType.GUEST

    @property
    def is_super_admin(self) -> bool:
        return SUPER_ADMIN_GROUP_ID in self.group_ids

    @property
    def state(self) -> UserState:
        """Lifecycle state derived from the lock, verification and license flags."""
        if self.is_locked:
            return UserState.LOCKED
        if self.email_verified:
            return UserState.ACTIVE
        if self.license_type is not None:
            return UserState.LICENSED_UNVERIFIED
        return UserState.PENDING
