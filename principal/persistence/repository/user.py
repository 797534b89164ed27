"""PostgreSQL implementation of User repository."""

from typing import Optional

from sqlalchemy import and_, delete, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from principal.domain.error import ConcurrencyConflictError, UserAlreadyExistsError
from principal.domain.model import GuestUser
from principal.domain.repository import UserRepository
from principal.domain.value import GroupId, TenantId, UserId
from principal.persistence.mappers import row_to_user, user_to_dict
from principal.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository.

    Uniqueness within a tenant is enforced by the ``uq_users_tenant_email``
    and ``uq_users_tenant_username`` constraints; updates are conditional on
    the ``version`` column.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[GuestUser]:
        """Find a user by ID."""
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email(
        self, email: str, tenant_id: TenantId | None = None
    ) -> Optional[GuestUser]:
        """Find a user by email, newest first when no tenant is given."""
        stmt = select(users_table).where(users_table.c.email == email)
        if tenant_id is not None:
            stmt = stmt.where(users_table.c.tenant_id == tenant_id)
        stmt = stmt.order_by(users_table.c.created_at.desc()).limit(1)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_by_email_or_username(
        self, tenant_id: TenantId, email: str, username: str
    ) -> Optional[GuestUser]:
        """Find a user in a tenant whose email or username collides."""
        stmt = (
            select(users_table)
            .where(
                and_(
                    users_table.c.tenant_id == tenant_id,
                    or_(
                        users_table.c.email == email,
                        users_table.c.username == username,
                    ),
                )
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def create(self, user: GuestUser) -> GuestUser:
        """Insert a new user.

        The insert runs in a savepoint so a uniqueness violation leaves the
        surrounding transaction usable.

        Raises:
            UserAlreadyExistsError: If the email or username is taken in the tenant
        """
        try:
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(users_table).values(**user_to_dict(user))
                )
        except IntegrityError as e:
            if "uq_users_tenant_username" in str(e.orig):
                raise UserAlreadyExistsError("username", user.username) from e
            raise UserAlreadyExistsError("email", user.email) from e

        return user

    async def update(self, user: GuestUser) -> GuestUser:
        """Update a user if its stored version still matches.

        Raises:
            ConcurrencyConflictError: If the stored version differs or the
                user no longer exists
        """
        values = user_to_dict(user)
        values.pop("id")
        values["version"] = user.version + 1

        stmt = (
            update(users_table)
            .where(
                and_(
                    users_table.c.id == user.id,
                    users_table.c.version == user.version,
                )
            )
            .values(**values)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise ConcurrencyConflictError("User", str(user.id))

        await self.session.flush()
        return user.model_copy(update={"version": user.version + 1})

    async def delete(self, user_id: UserId) -> bool:
        """Delete a user."""
        stmt = delete(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def count_in_group(
        self, group_id: GroupId, exclude_user_id: UserId | None = None
    ) -> int:
        """Count users whose ``group_ids`` contain a group."""
        stmt = (
            select(func.count())
            .select_from(users_table)
            .where(users_table.c.group_ids.contains([group_id]))
        )
        if exclude_user_id is not None:
            stmt = stmt.where(users_table.c.id != exclude_user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()
