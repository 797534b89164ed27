"""Unit tests for SuperAdminService."""

from uuid import uuid4

import pytest

from principal.domain.repository import UserRepository
from principal.domain.service import SuperAdminService
from principal.domain.value import SUPER_ADMIN_GROUP_ID, GroupId, UserId
from tests.factories import make_guest_user, make_tenant_id
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestIsSuperAdmin:
    @pytest.mark.asyncio
    async def test_member_of_super_admin_group(self, unit_env):
        service = await unit_env.get(SuperAdminService)
        users = await unit_env.get(UserRepository)
        admin = await users.create(
            make_guest_user(group_ids=frozenset({SUPER_ADMIN_GROUP_ID}))
        )

        assert await service.is_super_admin(admin.id) is True

    @pytest.mark.asyncio
    async def test_member_of_other_groups_only(self, unit_env):
        service = await unit_env.get(SuperAdminService)
        users = await unit_env.get(UserRepository)
        user = await users.create(make_guest_user(group_ids=frozenset({GroupId(uuid4())})))

        assert await service.is_super_admin(user.id) is False

    @pytest.mark.asyncio
    async def test_unknown_user_is_not_super_admin(self, unit_env):
        """Missing users answer False rather than raising."""
        service = await unit_env.get(SuperAdminService)

        assert await service.is_super_admin(UserId(uuid4())) is False


class TestIsLastSuperAdmin:
    @pytest.mark.asyncio
    async def test_only_admin_is_last(self, unit_env):
        service = await unit_env.get(SuperAdminService)
        users = await unit_env.get(UserRepository)
        admin = await users.create(
            make_guest_user(group_ids=frozenset({SUPER_ADMIN_GROUP_ID}))
        )
        await users.create(make_guest_user(email="other@example.com"))

        assert await service.is_last_super_admin(admin.id) is True

    @pytest.mark.asyncio
    async def test_one_of_several_admins_is_not_last(self, unit_env):
        service = await unit_env.get(SuperAdminService)
        users = await unit_env.get(UserRepository)
        tenant_id = make_tenant_id()
        first = await users.create(
            make_guest_user(
                tenant_id=tenant_id,
                email="first@example.com",
                group_ids=frozenset({SUPER_ADMIN_GROUP_ID}),
            )
        )
        await users.create(
            make_guest_user(
                tenant_id=tenant_id,
                email="second@example.com",
                group_ids=frozenset({SUPER_ADMIN_GROUP_ID}),
            )
        )

        assert await service.is_last_super_admin(first.id) is False

    @pytest.mark.asyncio
    async def test_non_admin_is_never_last(self, unit_env):
        service = await unit_env.get(SuperAdminService)
        users = await unit_env.get(UserRepository)
        user = await users.create(make_guest_user())

        assert await service.is_last_super_admin(user.id) is False
