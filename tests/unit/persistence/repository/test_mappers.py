"""Unit tests for row/domain mappers."""

from datetime import datetime, timezone
from uuid import uuid4

from principal.domain.value import (
    SUPER_ADMIN_GROUP_ID,
    InvitationStatus,
    LicenseType,
    UserType,
)
from principal.persistence.mappers import (
    invitation_to_dict,
    license_assignment_to_dict,
    row_to_invitation,
    row_to_license_assignment,
    row_to_license_pool,
    row_to_user,
    row_to_verification_code,
    user_to_dict,
)
from tests.factories import make_guest_user, make_invitation, make_tenant_id


class TestUserMapping:
    def test_user_to_dict_uses_column_values(self):
        user = make_guest_user(group_ids=frozenset({SUPER_ADMIN_GROUP_ID}))

        data = user_to_dict(user)

        assert data["user_type"] == "guest"
        assert data["license_type"] == "GuestLicense"
        assert data["group_ids"] == [SUPER_ADMIN_GROUP_ID]
        assert data["version"] == 0

    def test_unlicensed_user_maps_to_null(self):
        data = user_to_dict(make_guest_user(license_type=None))

        assert data["license_type"] is None

    def test_row_to_user_accepts_string_ids(self):
        user_id = uuid4()
        tenant_id = uuid4()
        row = {
            "id": str(user_id),
            "tenant_id": str(tenant_id),
            "email": "guest@example.com",
            "username": "guest",
            "first_name": "Grace",
            "last_name": "Hopper",
            "group_ids": [str(SUPER_ADMIN_GROUP_ID)],
            "user_type": "enterprise",
            "license_type": None,
            "password_hash": None,
            "email_verified": True,
            "is_locked": False,
            "failed_verification_attempts": 0,
            "created_at": datetime.now(timezone.utc),
            "version": 4,
        }

        user = row_to_user(row)

        assert user.id == user_id
        assert user.tenant_id == tenant_id
        assert user.user_type == UserType.ENTERPRISE
        assert user.license_type is None
        assert user.is_super_admin
        assert user.version == 4

    def test_round_trip_preserves_user(self):
        user = make_guest_user(
            password_hash="$2b$04$hash", failed_verification_attempts=2, version=3
        )

        assert row_to_user(user_to_dict(user)) == user

    def test_null_group_ids(self):
        data = user_to_dict(make_guest_user())
        data["group_ids"] = None

        assert row_to_user(data).group_ids == frozenset()


class TestOtherMappings:
    def test_invitation(self):
        invitation = make_invitation(make_tenant_id(), status=InvitationStatus.ACCEPTED)

        data = invitation_to_dict(invitation)

        assert data["status"] == "accepted"
        assert row_to_invitation(data) == invitation

    def test_verification_code(self):
        now = datetime.now(timezone.utc)
        row = {
            "id": uuid4(),
            "user_id": uuid4(),
            "code": "abc",
            "issued_at": now,
            "expires_at": now,
            "consumed_at": None,
        }

        code = row_to_verification_code(row)

        assert code.code == "abc"
        assert code.consumed_at is None
        assert not code.is_active(now)

    def test_license_assignment(self):
        row = {
            "user_id": uuid4(),
            "tenant_id": uuid4(),
            "license_type": "TrialLicense",
            "assigned_at": datetime.now(timezone.utc),
        }

        assignment = row_to_license_assignment(row)

        assert assignment.license_type == LicenseType.TRIAL_LICENSE
        assert license_assignment_to_dict(assignment)["license_type"] == "TrialLicense"

    def test_license_pool(self):
        pool = row_to_license_pool(
            {
                "tenant_id": uuid4(),
                "license_type": "GuestLicense",
                "total_seats": 3,
                "allocated_seats": 5,
            }
        )

        assert pool.available_seats == 0
