"""Unit tests for LicenseService."""

import asyncio
from uuid import uuid4

import pytest

from principal.domain.error import LicenseAssignmentFailedError
from principal.domain.repository import LicenseInventoryRepository
from principal.domain.service import LicenseService
from principal.domain.value import LicenseFailureReason, LicenseType, TenantId, UserId
from principal.persistence.repository.inmemory import (
    InMemoryLicenseInventoryRepository,
)
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class UnavailableInventory(InMemoryLicenseInventoryRepository):
    async def reserve(self, tenant_id, license_type, user_id):
        raise ConnectionError("license service unreachable")


class TestAssignLicense:
    """Tests for assign_license."""

    @pytest.mark.asyncio
    async def test_assign_license_takes_a_seat(self, unit_env):
        """A free seat is bound to the user and counted as allocated."""
        license_service = await unit_env.get(LicenseService)
        inventory = await unit_env.get(LicenseInventoryRepository)
        tenant_id = TenantId(uuid4())
        user_id = UserId(uuid4())
        await inventory.add_seats(tenant_id, LicenseType.GUEST_LICENSE, 2)

        assignment = await license_service.assign_license(
            user_id, LicenseType.GUEST_LICENSE, tenant_id
        )

        assert assignment.user_id == user_id
        assert assignment.license_type == LicenseType.GUEST_LICENSE
        assert await license_service.get_assignment(user_id) == assignment
        pool = inventory.get_pool(tenant_id, LicenseType.GUEST_LICENSE)
        assert pool.allocated_seats == 1
        assert pool.available_seats == 1

    @pytest.mark.asyncio
    async def test_assign_license_without_seats_fails(self, unit_env):
        """An exhausted pool raises with the user id and NO_SEATS_AVAILABLE."""
        license_service = await unit_env.get(LicenseService)
        tenant_id = TenantId(uuid4())
        user_id = UserId(uuid4())

        with pytest.raises(LicenseAssignmentFailedError) as exc_info:
            await license_service.assign_license(
                user_id, LicenseType.GUEST_LICENSE, tenant_id
            )

        assert exc_info.value.user_id == user_id
        assert exc_info.value.reason == LicenseFailureReason.NO_SEATS_AVAILABLE

    @pytest.mark.asyncio
    async def test_second_assignment_for_user_is_rejected(self, unit_env):
        """A user never holds two seats."""
        license_service = await unit_env.get(LicenseService)
        inventory = await unit_env.get(LicenseInventoryRepository)
        tenant_id = TenantId(uuid4())
        user_id = UserId(uuid4())
        await inventory.add_seats(tenant_id, LicenseType.GUEST_LICENSE, 5)
        await license_service.assign_license(user_id, LicenseType.GUEST_LICENSE, tenant_id)

        with pytest.raises(LicenseAssignmentFailedError) as exc_info:
            await license_service.assign_license(
                user_id, LicenseType.GUEST_LICENSE, tenant_id
            )

        assert exc_info.value.reason == LicenseFailureReason.ALREADY_ASSIGNED
        pool = inventory.get_pool(tenant_id, LicenseType.GUEST_LICENSE)
        assert pool.allocated_seats == 1

    @pytest.mark.asyncio
    async def test_inventory_failure_is_reported(self):
        """Store faults surface as INVENTORY_UNAVAILABLE with the user id."""
        license_service = LicenseService(UnavailableInventory())
        user_id = UserId(uuid4())

        with pytest.raises(LicenseAssignmentFailedError) as exc_info:
            await license_service.assign_license(
                user_id, LicenseType.GUEST_LICENSE, TenantId(uuid4())
            )

        assert exc_info.value.user_id == user_id
        assert exc_info.value.reason == LicenseFailureReason.INVENTORY_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_concurrent_assignments_never_oversell(self, unit_env):
        """More concurrent requests than seats: only the seat count succeeds."""
        license_service = await unit_env.get(LicenseService)
        inventory = await unit_env.get(LicenseInventoryRepository)
        tenant_id = TenantId(uuid4())
        await inventory.add_seats(tenant_id, LicenseType.GUEST_LICENSE, 3)

        results = await asyncio.gather(
            *(
                license_service.assign_license(
                    UserId(uuid4()), LicenseType.GUEST_LICENSE, tenant_id
                )
                for _ in range(5)
            ),
            return_exceptions=True,
        )

        succeeded = [r for r in results if not isinstance(r, Exception)]
        failed = [r for r in results if isinstance(r, LicenseAssignmentFailedError)]
        assert len(succeeded) == 3
        assert len(failed) == 2
        assert all(
            e.reason == LicenseFailureReason.NO_SEATS_AVAILABLE for e in failed
        )
        pool = inventory.get_pool(tenant_id, LicenseType.GUEST_LICENSE)
        assert pool.allocated_seats == 3


class TestReleaseLicense:
    """Tests for release_license."""

    @pytest.mark.asyncio
    async def test_release_returns_seat_and_is_idempotent(self, unit_env):
        """Releasing frees the seat; releasing again is a no-op."""
        license_service = await unit_env.get(LicenseService)
        inventory = await unit_env.get(LicenseInventoryRepository)
        tenant_id = TenantId(uuid4())
        user_id = UserId(uuid4())
        await inventory.add_seats(tenant_id, LicenseType.USER_LICENSE, 1)
        await license_service.assign_license(user_id, LicenseType.USER_LICENSE, tenant_id)

        assert await license_service.release_license(user_id) is True
        assert await license_service.release_license(user_id) is False

        assert await license_service.get_assignment(user_id) is None
        pool = inventory.get_pool(tenant_id, LicenseType.USER_LICENSE)
        assert pool.allocated_seats == 0
