"""License inventory entities."""

from datetime import datetime, timezone

from pydantic import Field

from principal.domain.model.common import DomainModel
from principal.domain.value import (
    LicenseReservationStatus,
    LicenseType,
    TenantId,
    UserId,
)


class LicenseAssignment(DomainModel):
    """A license seat bound to a user. A user holds at most one."""

    user_id: UserId
    tenant_id: TenantId
    license_type: LicenseType
    assigned_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class LicensePool(DomainModel):
    """Seat inventory for one license type within a tenant."""

    tenant_id: TenantId
    license_type: LicenseType
    total_seats: int = Field(default=0, ge=0)
    allocated_seats: int = Field(default=0, ge=0)

    @property
    def available_seats(self) -> int:
        return max(0, self.total_seats - self.allocated_seats)


class LicenseReservation(DomainModel):
    """Result of a reservation attempt against the inventory."""

    status: LicenseReservationStatus
    assignment: LicenseAssignment | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == LicenseReservationStatus.RESERVED
