"""License assignment domain service."""

import logfire

from principal.domain.error import LicenseAssignmentFailedError
from principal.domain.model.license import LicenseAssignment
from principal.domain.repository import LicenseInventoryRepository
from principal.domain.value import (
    LicenseFailureReason,
    LicenseReservationStatus,
    LicenseType,
    TenantId,
    UserId,
)

from .base import Service

_REASON_BY_STATUS = {
    LicenseReservationStatus.NO_SEATS_AVAILABLE: LicenseFailureReason.NO_SEATS_AVAILABLE,
    LicenseReservationStatus.ALREADY_ASSIGNED: LicenseFailureReason.ALREADY_ASSIGNED,
}


class LicenseService(Service):
    """Assigns and releases license seats."""

    def __init__(self, license_repository: LicenseInventoryRepository) -> None:
        """Initialize license service.

        Args:
            license_repository: License inventory repository
        """
        self.license_repository = license_repository

    async def assign_license(
        self, user_id: UserId, license_type: LicenseType, tenant_id: TenantId
    ) -> LicenseAssignment:
        """Reserve a seat of ``license_type`` and bind it to a user.

        Args:
            user_id: User receiving the seat
            license_type: Kind of seat
            tenant_id: Tenant whose inventory is charged

        Returns:
            The new assignment

        Raises:
            LicenseAssignmentFailedError: If no seat is free, the user already
                holds one, or the inventory could not be reached
        """
        with logfire.span(
            "license_service.assign_license",
            user_id=str(user_id),
            license_type=license_type.value,
            tenant_id=str(tenant_id),
        ):
            try:
                reservation = await self.license_repository.reserve(
                    tenant_id, license_type, user_id
                )
            except Exception as e:
                logfire.error(
                    "License inventory unavailable",
                    user_id=str(user_id),
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise LicenseAssignmentFailedError(
                    f"License inventory unavailable while assigning {license_type.value} to user {user_id}",
                    user_id,
                    LicenseFailureReason.INVENTORY_UNAVAILABLE,
                ) from e

            if not reservation.succeeded or reservation.assignment is None:
                reason = _REASON_BY_STATUS.get(
                    reservation.status, LicenseFailureReason.INVENTORY_UNAVAILABLE
                )
                logfire.warn(
                    "License assignment rejected",
                    user_id=str(user_id),
                    license_type=license_type.value,
                    reason=reason.value,
                )
                raise LicenseAssignmentFailedError(
                    f"Failed to assign {license_type.value} to user {user_id}: {reason.value}",
                    user_id,
                    reason,
                )

            logfire.info(
                "License assigned",
                user_id=str(user_id),
                license_type=license_type.value,
            )
            return reservation.assignment

    async def release_license(self, user_id: UserId) -> bool:
        """Return a user's seat to the inventory.

        Releasing a user without an assignment is a no-op.

        Args:
            user_id: User whose seat is released

        Returns:
            True if a seat was released
        """
        with logfire.span("license_service.release_license", user_id=str(user_id)):
            released = await self.license_repository.release(user_id)
            logfire.info("License released", user_id=str(user_id), released=released)
            return released

    async def get_assignment(self, user_id: UserId) -> LicenseAssignment | None:
        """Get the assignment a user holds, if any."""
        return await self.license_repository.find_assignment(user_id)
