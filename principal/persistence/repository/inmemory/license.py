"""In-memory license inventory for testing."""

from datetime import datetime, timezone
from typing import Optional

from principal.domain.model.license import (
    LicenseAssignment,
    LicensePool,
    LicenseReservation,
)
from principal.domain.repository.license import LicenseInventoryRepository
from principal.domain.value import (
    LicenseReservationStatus,
    LicenseType,
    TenantId,
    UserId,
)


class InMemoryLicenseInventoryRepository(LicenseInventoryRepository):
    """In-memory implementation of LicenseInventoryRepository for testing."""

    def __init__(self) -> None:
        self._pools: dict[tuple[TenantId, LicenseType], LicensePool] = {}
        self._assignments: dict[UserId, LicenseAssignment] = {}

    async def reserve(
        self, tenant_id: TenantId, license_type: LicenseType, user_id: UserId
    ) -> LicenseReservation:
        """Take a free seat and bind it to a user."""
        if user_id in self._assignments:
            return LicenseReservation(status=LicenseReservationStatus.ALREADY_ASSIGNED)

        pool = self._pools.get((tenant_id, license_type))
        if pool is None or pool.available_seats == 0:
            return LicenseReservation(status=LicenseReservationStatus.NO_SEATS_AVAILABLE)

        assignment = LicenseAssignment(
            user_id=user_id,
            tenant_id=tenant_id,
            license_type=license_type,
            assigned_at=datetime.now(timezone.utc),
        )
        self._pools[(tenant_id, license_type)] = pool.model_copy(
            update={"allocated_seats": pool.allocated_seats + 1}
        )
        self._assignments[user_id] = assignment
        return LicenseReservation(
            status=LicenseReservationStatus.RESERVED, assignment=assignment
        )

    async def release(self, user_id: UserId) -> bool:
        """Delete a user's assignment and give the seat back to its pool."""
        assignment = self._assignments.pop(user_id, None)
        if assignment is None:
            return False

        key = (assignment.tenant_id, assignment.license_type)
        pool = self._pools.get(key)
        if pool is not None and pool.allocated_seats > 0:
            self._pools[key] = pool.model_copy(
                update={"allocated_seats": pool.allocated_seats - 1}
            )
        return True

    async def find_assignment(self, user_id: UserId) -> Optional[LicenseAssignment]:
        """Find the assignment held by a user."""
        return self._assignments.get(user_id)

    async def add_seats(
        self, tenant_id: TenantId, license_type: LicenseType, count: int
    ) -> LicensePool:
        """Add seats to a pool, creating the pool on first use."""
        key = (tenant_id, license_type)
        pool = self._pools.get(key) or LicensePool(
            tenant_id=tenant_id, license_type=license_type
        )
        pool = pool.model_copy(update={"total_seats": pool.total_seats + count})
        self._pools[key] = pool
        return pool

    def get_pool(
        self, tenant_id: TenantId, license_type: LicenseType
    ) -> Optional[LicensePool]:
        """Current pool state, for assertions."""
        return self._pools.get((tenant_id, license_type))
