"""In-memory user repository for testing."""

from typing import Optional

from principal.domain.error import ConcurrencyConflictError, UserAlreadyExistsError
from principal.domain.model.user import GuestUser
from principal.domain.repository.user import UserRepository
from principal.domain.value import GroupId, TenantId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing.

    Check-and-set operations contain no await, so they are atomic with
    respect to other coroutines on the event loop.
    """

    def __init__(self) -> None:
        self._users: dict[UserId, GuestUser] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[GuestUser]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_email(
        self, email: str, tenant_id: TenantId | None = None
    ) -> Optional[GuestUser]:
        """Find a user by email, newest first when no tenant is given."""
        matches = [
            user
            for user in self._users.values()
            if user.email == email and (tenant_id is None or user.tenant_id == tenant_id)
        ]
        if not matches:
            return None
        return max(matches, key=lambda user: user.created_at)

    async def find_by_email_or_username(
        self, tenant_id: TenantId, email: str, username: str
    ) -> Optional[GuestUser]:
        """Find a user in a tenant whose email or username collides."""
        for user in self._users.values():
            if user.tenant_id == tenant_id and (
                user.email == email or user.username == username
            ):
                return user
        return None

    async def create(self, user: GuestUser) -> GuestUser:
        """Insert a new user, enforcing per-tenant uniqueness."""
        for existing in self._users.values():
            if existing.tenant_id != user.tenant_id:
                continue
            if existing.email == user.email:
                raise UserAlreadyExistsError("email", user.email)
            if existing.username == user.username:
                raise UserAlreadyExistsError("username", user.username)

        self._users[user.id] = user
        return user

    async def update(self, user: GuestUser) -> GuestUser:
        """Update a user if its stored version still matches."""
        stored = self._users.get(user.id)
        if stored is None or stored.version != user.version:
            raise ConcurrencyConflictError("User", str(user.id))

        updated = user.model_copy(update={"version": user.version + 1})
        self._users[user.id] = updated
        return updated

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user."""
        return self._users.pop(user_id, None) is not None

    async def count_in_group(
        self, group_id: GroupId, exclude_user_id: UserId | None = None
    ) -> int:
        """Count users that belong to a group."""
        return sum(
            1
            for user in self._users.values()
            if group_id in user.group_ids and user.id != exclude_user_id
        )
