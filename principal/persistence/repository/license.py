"""PostgreSQL implementation of the license inventory."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import and_, delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from principal.domain.model import LicenseAssignment, LicensePool, LicenseReservation
from principal.domain.repository import LicenseInventoryRepository
from principal.domain.value import (
    LicenseReservationStatus,
    LicenseType,
    TenantId,
    UserId,
)
from principal.persistence.mappers import (
    license_assignment_to_dict,
    row_to_license_assignment,
    row_to_license_pool,
)
from principal.persistence.tables import (
    license_assignments_table,
    license_pools_table,
)


class PostgresLicenseInventoryRepository(LicenseInventoryRepository):
    """PostgreSQL implementation of LicenseInventoryRepository.

    A reservation is a conditional seat increment plus an insert keyed on
    ``user_id``, both inside one savepoint: either both apply or neither does.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def reserve(
        self, tenant_id: TenantId, license_type: LicenseType, user_id: UserId
    ) -> LicenseReservation:
        """Take a free seat and bind it to a user."""
        if await self.find_assignment(user_id) is not None:
            return LicenseReservation(status=LicenseReservationStatus.ALREADY_ASSIGNED)

        assignment = LicenseAssignment(
            user_id=user_id,
            tenant_id=tenant_id,
            license_type=license_type,
            assigned_at=datetime.now(timezone.utc),
        )

        try:
            async with self.session.begin_nested():
                result = await self.session.execute(
                    update(license_pools_table)
                    .where(
                        and_(
                            license_pools_table.c.tenant_id == tenant_id,
                            license_pools_table.c.license_type == license_type.value,
                            license_pools_table.c.allocated_seats
                            < license_pools_table.c.total_seats,
                        )
                    )
                    .values(allocated_seats=license_pools_table.c.allocated_seats + 1)
                )
                if result.rowcount == 0:
                    return LicenseReservation(
                        status=LicenseReservationStatus.NO_SEATS_AVAILABLE
                    )

                await self.session.execute(
                    pg_insert(license_assignments_table).values(
                        **license_assignment_to_dict(assignment)
                    )
                )
        except IntegrityError:
            # A concurrent reservation for the same user won; the savepoint
            # rolled our seat back.
            return LicenseReservation(status=LicenseReservationStatus.ALREADY_ASSIGNED)

        return LicenseReservation(
            status=LicenseReservationStatus.RESERVED, assignment=assignment
        )

    async def release(self, user_id: UserId) -> bool:
        """Delete a user's assignment and give the seat back to its pool."""
        result = await self.session.execute(
            delete(license_assignments_table)
            .where(license_assignments_table.c.user_id == user_id)
            .returning(
                license_assignments_table.c.tenant_id,
                license_assignments_table.c.license_type,
            )
        )
        row = result.mappings().first()
        if row is None:
            return False

        await self.session.execute(
            update(license_pools_table)
            .where(
                and_(
                    license_pools_table.c.tenant_id == row["tenant_id"],
                    license_pools_table.c.license_type == row["license_type"],
                    license_pools_table.c.allocated_seats > 0,
                )
            )
            .values(allocated_seats=license_pools_table.c.allocated_seats - 1)
        )
        await self.session.flush()
        return True

    async def find_assignment(self, user_id: UserId) -> Optional[LicenseAssignment]:
        """Find the assignment held by a user."""
        stmt = select(license_assignments_table).where(
            license_assignments_table.c.user_id == user_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_license_assignment(dict(row)) if row else None

    async def add_seats(
        self, tenant_id: TenantId, license_type: LicenseType, count: int
    ) -> LicensePool:
        """Add seats to a pool, creating the pool on first use."""
        stmt = pg_insert(license_pools_table).values(
            tenant_id=tenant_id,
            license_type=license_type.value,
            total_seats=count,
            allocated_seats=0,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[
                license_pools_table.c.tenant_id,
                license_pools_table.c.license_type,
            ],
            set_={"total_seats": license_pools_table.c.total_seats + count},
        ).returning(*license_pools_table.c)
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_license_pool(dict(row))
