"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from principal.domain.model.user import GuestUser
from principal.domain.value import GroupId, TenantId, UserId


class UserRepository(ABC):
    """Repository for the user aggregate.

    Defines the contract for user persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[GuestUser]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(
        self, email: str, tenant_id: TenantId | None = None
    ) -> Optional[GuestUser]:
        """Find a user by normalized email.

        Args:
            email: Normalized email address
            tenant_id: Restrict the lookup to one tenant; when None, the most
                recently created match across tenants is returned

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email_or_username(
        self, tenant_id: TenantId, email: str, username: str
    ) -> Optional[GuestUser]:
        """Find a user in a tenant whose email or username collides.

        Args:
            tenant_id: Tenant to search
            email: Normalized email address
            username: Normalized username

        Returns:
            The first colliding user, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, user: GuestUser) -> GuestUser:
        """Insert a new user.

        Args:
            user: The user to create

        Returns:
            The stored user

        Raises:
            UserAlreadyExistsError: If the email or username is taken in the tenant
        """
        pass

    @abstractmethod
    async def update(self, user: GuestUser) -> GuestUser:
        """Conditionally update a user.

        The write only applies when the stored version equals ``user.version``.

        Args:
            user: The modified user, carrying the version it was read at

        Returns:
            The stored user with its version incremented

        Raises:
            ConcurrencyConflictError: If the stored version differs or the
                user no longer exists
        """
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user.

        Args:
            user_id: The user's unique identifier

        Returns:
            True if a user was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def count_in_group(
        self, group_id: GroupId, exclude_user_id: UserId | None = None
    ) -> int:
        """Count users that belong to a group.

        Args:
            group_id: Group to count members of
            exclude_user_id: Optional user left out of the count

        Returns:
            Number of members
        """
        pass
