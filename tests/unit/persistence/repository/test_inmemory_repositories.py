"""Unit tests for the in-memory repositories' conditional writes."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from principal.domain.error import ConcurrencyConflictError, UserAlreadyExistsError
from principal.domain.value import (
    SUPER_ADMIN_GROUP_ID,
    InvitationStatus,
    LicenseReservationStatus,
    LicenseType,
    UserId,
)
from principal.persistence.repository.inmemory import (
    InMemoryInvitationRepository,
    InMemoryLicenseInventoryRepository,
    InMemoryUserRepository,
    InMemoryVerificationCodeRepository,
)
from tests.factories import make_guest_user, make_invitation, make_tenant_id


class TestInMemoryUserRepository:
    @pytest.mark.asyncio
    async def test_update_bumps_version(self):
        repo = InMemoryUserRepository()
        user = await repo.create(make_guest_user())

        updated = await repo.update(user.model_copy(update={"email_verified": True}))

        assert updated.version == user.version + 1
        assert (await repo.find_by_id(user.id)).email_verified

    @pytest.mark.asyncio
    async def test_stale_update_is_rejected(self):
        repo = InMemoryUserRepository()
        user = await repo.create(make_guest_user())
        await repo.update(user.model_copy(update={"failed_verification_attempts": 1}))

        with pytest.raises(ConcurrencyConflictError):
            await repo.update(user.model_copy(update={"is_locked": True}))

        assert (await repo.find_by_id(user.id)).is_locked is False

    @pytest.mark.asyncio
    async def test_update_of_deleted_user_conflicts(self):
        repo = InMemoryUserRepository()
        user = await repo.create(make_guest_user())
        await repo.delete(user.id)

        with pytest.raises(ConcurrencyConflictError):
            await repo.update(user)

    @pytest.mark.asyncio
    async def test_uniqueness_is_per_tenant(self):
        repo = InMemoryUserRepository()
        tenant_id = make_tenant_id()
        await repo.create(make_guest_user(tenant_id=tenant_id, username="grace"))

        with pytest.raises(UserAlreadyExistsError) as exc_info:
            await repo.create(
                make_guest_user(tenant_id=tenant_id, email="x@example.com", username="grace")
            )
        assert exc_info.value.field == "username"

        await repo.create(make_guest_user(tenant_id=make_tenant_id(), username="grace"))

    @pytest.mark.asyncio
    async def test_find_by_email_without_tenant_returns_newest(self):
        repo = InMemoryUserRepository()
        now = datetime.now(timezone.utc)
        await repo.create(make_guest_user(created_at=now - timedelta(days=1)))
        newest = await repo.create(make_guest_user(created_at=now))

        assert (await repo.find_by_email("guest@example.com")).id == newest.id

    @pytest.mark.asyncio
    async def test_count_in_group_excludes_user(self):
        repo = InMemoryUserRepository()
        admins = frozenset({SUPER_ADMIN_GROUP_ID})
        first = await repo.create(make_guest_user(email="a@example.com", group_ids=admins))
        await repo.create(make_guest_user(email="b@example.com", group_ids=admins))
        await repo.create(make_guest_user(email="c@example.com"))

        assert await repo.count_in_group(SUPER_ADMIN_GROUP_ID) == 2
        assert await repo.count_in_group(SUPER_ADMIN_GROUP_ID, exclude_user_id=first.id) == 1


class TestInMemoryInvitationRepository:
    @pytest.mark.asyncio
    async def test_find_pending_ignores_other_statuses(self):
        repo = InMemoryInvitationRepository()
        tenant_id = make_tenant_id()
        await repo.save(make_invitation(tenant_id, status=InvitationStatus.ACCEPTED))

        assert await repo.find_pending(tenant_id, "guest@example.com") is None

        pending = await repo.save(make_invitation(tenant_id))
        assert await repo.find_pending(tenant_id, "guest@example.com") == pending


class TestInMemoryVerificationCodeRepository:
    @pytest.mark.asyncio
    async def test_issue_replaces_unconsumed_code(self):
        repo = InMemoryVerificationCodeRepository()
        user_id = UserId(uuid4())
        now = datetime.now(timezone.utc)

        await repo.issue(user_id, "first", now, now + timedelta(hours=1))
        await repo.issue(user_id, "second", now, now + timedelta(hours=1))

        assert [c.code for c in repo.all_for_user(user_id)] == ["second"]

    @pytest.mark.asyncio
    async def test_consume_only_once(self):
        repo = InMemoryVerificationCodeRepository()
        now = datetime.now(timezone.utc)
        code = await repo.issue(UserId(uuid4()), "abc", now, now + timedelta(hours=1))

        assert await repo.consume(code.id, now) is True
        assert await repo.consume(code.id, now) is False
        assert await repo.find_active(code.user_id, now) is None


class TestInMemoryLicenseInventoryRepository:
    @pytest.mark.asyncio
    async def test_reserve_and_release(self):
        repo = InMemoryLicenseInventoryRepository()
        tenant_id = make_tenant_id()
        user_id = UserId(uuid4())
        await repo.add_seats(tenant_id, LicenseType.GUEST_LICENSE, 1)

        reservation = await repo.reserve(tenant_id, LicenseType.GUEST_LICENSE, user_id)
        exhausted = await repo.reserve(tenant_id, LicenseType.GUEST_LICENSE, UserId(uuid4()))
        duplicate = await repo.reserve(tenant_id, LicenseType.GUEST_LICENSE, user_id)

        assert reservation.succeeded
        assert exhausted.status == LicenseReservationStatus.NO_SEATS_AVAILABLE
        assert duplicate.status == LicenseReservationStatus.ALREADY_ASSIGNED

        assert await repo.release(user_id) is True
        assert await repo.release(user_id) is False
        assert repo.get_pool(tenant_id, LicenseType.GUEST_LICENSE).allocated_seats == 0

    @pytest.mark.asyncio
    async def test_unknown_pool_has_no_seats(self):
        repo = InMemoryLicenseInventoryRepository()

        reservation = await repo.reserve(
            make_tenant_id(), LicenseType.TRIAL_LICENSE, UserId(uuid4())
        )

        assert reservation.status == LicenseReservationStatus.NO_SEATS_AVAILABLE
        assert reservation.assignment is None
