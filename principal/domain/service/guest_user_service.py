"""Guest user domain service."""

import asyncio
from datetime import datetime, timezone
from uuid import uuid4

import bcrypt
import logfire

from principal.domain.error import (
    LicenseAssignmentFailedError,
    UserAlreadyExistsError,
)
from principal.domain.model.user import GuestUser
from principal.domain.repository import UserRepository
from principal.domain.value import (
    LicenseType,
    ProvisionGuestUserReturnCode,
    GroupId,
    TenantId,
    UserId,
    UserType,
)

from .base import Service
from .license_service import LicenseService

_CONFLICT_CODES = {
    "email": ProvisionGuestUserReturnCode.EMAIL_IS_NOT_UNIQUE,
    "username": ProvisionGuestUserReturnCode.USERNAME_IS_NOT_UNIQUE,
}


class GuestUserService(Service):
    """Creates guest accounts and binds their license seat.

    A guest that cannot be licensed is removed again, so the store never keeps
    an unlicensed guest created by provisioning.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        license_service: LicenseService,
        bcrypt_rounds: int = 10,
        default_group_ids: frozenset[GroupId] = frozenset(),
    ) -> None:
        """Initialize guest user service.

        Args:
            user_repository: User repository
            license_service: License assignment coordinator
            bcrypt_rounds: bcrypt work factor for password hashes
            default_group_ids: Groups every new guest joins
        """
        self.user_repository = user_repository
        self.license_service = license_service
        self.bcrypt_rounds = bcrypt_rounds
        self.default_group_ids = default_group_ids

    async def exists(self, tenant_id: TenantId, email: str, username: str) -> bool:
        """Check whether the email or username is already taken in a tenant."""
        existing = await self.user_repository.find_by_email_or_username(
            tenant_id, email, username
        )
        return existing is not None

    async def get_user(self, user_id: UserId) -> GuestUser | None:
        """Get a user by ID."""
        return await self.user_repository.find_by_id(user_id)

    async def find_by_email(
        self, email: str, tenant_id: TenantId | None = None
    ) -> GuestUser | None:
        """Find a user by normalized email, optionally within one tenant."""
        return await self.user_repository.find_by_email(email, tenant_id)

    async def provision_guest_user(
        self,
        tenant_id: TenantId,
        email: str,
        username: str,
        first_name: str,
        last_name: str,
        password: str,
        license_type: LicenseType,
        email_verified: bool = False,
    ) -> tuple[ProvisionGuestUserReturnCode, GuestUser | None]:
        """Create a guest account and assign it a license.

        Args:
            tenant_id: Tenant the guest joins
            email: Normalized email
            username: Normalized username
            first_name: Trimmed first name
            last_name: Trimmed last name
            password: Plain-text password, hashed before storage
            license_type: Seat to assign
            email_verified: Create the account already verified

        Returns:
            Tuple of (return code, user). The user is only set on SUCCESS.
        """
        with logfire.span(
            "guest_user_service.provision_guest_user",
            tenant_id=str(tenant_id),
            email=email,
            license_type=license_type.value,
        ):
            # bcrypt is CPU-bound; keep it off the event loop
            password_hash = await asyncio.to_thread(self.hash_password, password)
            user = GuestUser(
                id=UserId(uuid4()),
                email=email,
                username=username,
                first_name=first_name,
                last_name=last_name,
                tenant_id=tenant_id,
                group_ids=self.default_group_ids,
                user_type=UserType.GUEST,
                password_hash=password_hash,
                email_verified=email_verified,
                created_at=datetime.now(timezone.utc),
            )

            try:
                created = await self.user_repository.create(user)
            except UserAlreadyExistsError as e:
                logfire.warn(
                    "Guest user already exists",
                    tenant_id=str(tenant_id),
                    field=e.field,
                )
                return (
                    _CONFLICT_CODES.get(e.field, ProvisionGuestUserReturnCode.FAILED),
                    None,
                )

            try:
                await self.license_service.assign_license(
                    created.id, license_type, tenant_id
                )
            except LicenseAssignmentFailedError as e:
                logfire.error(
                    "Guest license assignment failed, removing user",
                    user_id=str(created.id),
                    reason=e.reason.value,
                )
                await self.user_repository.delete(created.id)
                return ProvisionGuestUserReturnCode.FAILED, None

            try:
                licensed = await self.user_repository.update(
                    created.model_copy(update={"license_type": license_type})
                )
            except Exception as e:
                logfire.error(
                    "Could not record guest license, rolling back",
                    user_id=str(created.id),
                    error=str(e),
                )
                await self.license_service.release_license(created.id)
                await self.user_repository.delete(created.id)
                return ProvisionGuestUserReturnCode.FAILED, None

            logfire.info(
                "Guest user provisioned",
                user_id=str(licensed.id),
                tenant_id=str(tenant_id),
                license_type=license_type.value,
            )
            return ProvisionGuestUserReturnCode.SUCCESS, licensed

    def hash_password(self, password: str) -> str:
        """Hash a password with bcrypt."""
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

