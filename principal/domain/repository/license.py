"""License inventory repository interface."""

from abc import ABC, abstractmethod

from principal.domain.model.license import (
    LicenseAssignment,
    LicensePool,
    LicenseReservation,
)
from principal.domain.value import LicenseType, TenantId, UserId


class LicenseInventoryRepository(ABC):
    """Seat inventory with per-user assignments.

    Reservation is a compare-and-set: a seat is only taken while one is
    free, and a user already holding an assignment is rejected rather than
    given a second seat.
    """

    @abstractmethod
    async def reserve(
        self, tenant_id: TenantId, license_type: LicenseType, user_id: UserId
    ) -> LicenseReservation:
        """Reserve one seat and bind it to a user.

        Args:
            tenant_id: Tenant whose inventory is charged
            license_type: Kind of seat to take
            user_id: User receiving the seat

        Returns:
            Reservation outcome; carries the assignment when RESERVED
        """
        pass

    @abstractmethod
    async def release(self, user_id: UserId) -> bool:
        """Return a user's seat to the inventory.

        Args:
            user_id: User whose assignment is removed

        Returns:
            True if an assignment was released, False if the user held none
        """
        pass

    @abstractmethod
    async def find_assignment(self, user_id: UserId) -> LicenseAssignment | None:
        """Find the assignment held by a user.

        Args:
            user_id: The user's unique identifier

        Returns:
            The assignment if any, None otherwise
        """
        pass

    @abstractmethod
    async def add_seats(
        self, tenant_id: TenantId, license_type: LicenseType, count: int
    ) -> LicensePool:
        """Add purchased seats to a tenant's pool, creating it if needed.

        Args:
            tenant_id: Tenant owning the pool
            license_type: Kind of seat
            count: Seats to add

        Returns:
            The updated pool
        """
        pass
