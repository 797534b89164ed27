"""Unit tests for InvitationService."""

from datetime import datetime, timedelta, timezone

import pytest

from principal.domain.repository import InvitationRepository
from principal.domain.service import InvitationService
from principal.domain.value import InvitationStatus
from tests.factories import make_invitation, make_tenant_id
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestFindValidInvitation:
    """Tests for find_valid_invitation."""

    @pytest.mark.asyncio
    async def test_pending_invitation_is_valid(self, unit_env):
        service = await unit_env.get(InvitationService)
        invitations = await unit_env.get(InvitationRepository)
        tenant_id = make_tenant_id()
        invitation = await invitations.save(make_invitation(tenant_id))

        result = await service.find_valid_invitation(
            tenant_id, "guest@example.com", None, datetime.now(timezone.utc)
        )

        assert result == invitation

    @pytest.mark.asyncio
    async def test_missing_invitation(self, unit_env):
        service = await unit_env.get(InvitationService)

        result = await service.find_valid_invitation(
            make_tenant_id(), "guest@example.com", None, datetime.now(timezone.utc)
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_invitation_for_other_tenant_does_not_count(self, unit_env):
        service = await unit_env.get(InvitationService)
        invitations = await unit_env.get(InvitationRepository)
        await invitations.save(make_invitation(make_tenant_id()))

        result = await service.find_valid_invitation(
            make_tenant_id(), "guest@example.com", None, datetime.now(timezone.utc)
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_expired_invitation(self, unit_env):
        service = await unit_env.get(InvitationService)
        invitations = await unit_env.get(InvitationRepository)
        tenant_id = make_tenant_id()
        await invitations.save(make_invitation(tenant_id, expires_in=timedelta(seconds=-1)))

        result = await service.find_valid_invitation(
            tenant_id, "guest@example.com", None, datetime.now(timezone.utc)
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_revoked_invitation(self, unit_env):
        service = await unit_env.get(InvitationService)
        invitations = await unit_env.get(InvitationRepository)
        tenant_id = make_tenant_id()
        await invitations.save(make_invitation(tenant_id, status=InvitationStatus.REVOKED))

        result = await service.find_valid_invitation(
            tenant_id, "guest@example.com", None, datetime.now(timezone.utc)
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_token_must_match_when_both_present(self, unit_env):
        service = await unit_env.get(InvitationService)
        invitations = await unit_env.get(InvitationRepository)
        tenant_id = make_tenant_id()
        await invitations.save(make_invitation(tenant_id, token="invite-token-1"))
        now = datetime.now(timezone.utc)

        assert await service.find_valid_invitation(
            tenant_id, "guest@example.com", "invite-token-2", now
        ) is None
        assert await service.find_valid_invitation(
            tenant_id, "guest@example.com", "invite-token-1", now
        ) is not None

    @pytest.mark.asyncio
    async def test_token_is_optional_on_request(self, unit_env):
        """A registration without a token is matched on tenant and email alone."""
        service = await unit_env.get(InvitationService)
        invitations = await unit_env.get(InvitationRepository)
        tenant_id = make_tenant_id()
        await invitations.save(make_invitation(tenant_id, token="invite-token-1"))

        result = await service.find_valid_invitation(
            tenant_id, "guest@example.com", None, datetime.now(timezone.utc)
        )

        assert result is not None
