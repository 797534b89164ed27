"""Super-admin authorization domain service."""

import logfire

from principal.domain.repository import UserRepository
from principal.domain.value import SUPER_ADMIN_GROUP_ID, UserId

from .base import Service


class SuperAdminService(Service):
    """Answers whether a user belongs to the super-admin group.

    Read-only; used as a guard by privileged administrative operations.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize super-admin service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def is_super_admin(self, user_id: UserId) -> bool:
        """Check super-admin membership.

        Args:
            user_id: User to check

        Returns:
            True if the user exists and is in the super-admin group;
            False otherwise, including when the user does not exist
        """
        with logfire.span("super_admin_service.is_super_admin", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if user is None:
                logfire.info("Super-admin check for unknown user", user_id=str(user_id))
                return False
            return user.is_super_admin

    async def is_last_super_admin(self, user_id: UserId) -> bool:
        """Check whether the user is the only remaining super admin.

        Args:
            user_id: User to check

        Returns:
            True if the user is a super admin and no other user is
        """
        with logfire.span(
            "super_admin_service.is_last_super_admin", user_id=str(user_id)
        ):
            if not await self.is_super_admin(user_id):
                return False
            others = await self.user_repository.count_in_group(
                SUPER_ADMIN_GROUP_ID, exclude_user_id=user_id
            )
            return others == 0
