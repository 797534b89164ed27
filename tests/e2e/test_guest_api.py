"""End-to-end tests for the guest HTTP API."""

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from principal.adapter.email import MockEmailSender
from principal.domain.repository import (
    InvitationRepository,
    LicenseInventoryRepository,
    UserRepository,
)
from principal.domain.value import SUPER_ADMIN_GROUP_ID, LicenseType
from principal.interface.api.app import create_app
from tests.di import build_test_container
from tests.factories import make_guest_user, make_invitation, make_tenant_id

TENANT_ID = make_tenant_id()


@pytest.fixture
def container():
    return build_test_container(extra_providers=(FastapiProvider(),))


@pytest.fixture
def client(container):
    """Test client whose portal runs seeding on the app's event loop."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


def _get(client, container, dependency):
    return client.portal.call(container.get, dependency)


def _seed_invitation(client, container, email="guest@example.com", seats=1):
    invitations = _get(client, container, InvitationRepository)
    inventory = _get(client, container, LicenseInventoryRepository)
    client.portal.call(invitations.save, make_invitation(TENANT_ID, email=email))
    client.portal.call(inventory.add_seats, TENANT_ID, LicenseType.GUEST_LICENSE, seats)


def _registration(**overrides):
    body = {
        "tenant_id": str(TENANT_ID),
        "email": "guest@example.com",
        "first_name": "Grace",
        "last_name": "Hopper",
        "password": "correct horse",
        "password_confirmation": "correct horse",
    }
    body.update(overrides)
    return body


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestGuestFlow:
    def test_register_then_verify(self, client, container):
        """An invited guest registers and verifies with the emailed code."""
        _seed_invitation(client, container)
        sender = _get(client, container, MockEmailSender)

        created = client.post("/guests", json=_registration())

        assert created.status_code == 200
        assert created.json()["result_code"] == "SucessEmailVerificationNeeded"
        assert created.json()["user_id"]

        verified = client.post(
            "/guests/verify",
            json={"email": "guest@example.com", "code": sender.last_code},
        )

        assert verified.status_code == 200
        assert verified.json()["result_code"] == "Success"

    def test_wrong_codes_lock_account(self, client, container):
        _seed_invitation(client, container)
        client.post("/guests", json=_registration())

        codes = [
            client.post(
                "/guests/verify", json={"email": "guest@example.com", "code": "nope"}
            ).json()["result_code"]
            for _ in range(3)
        ]

        assert codes == ["InvalidCode", "InvalidCode", "UserIsLocked"]

    def test_uninvited_registration(self, client):
        response = client.post("/guests", json=_registration())

        assert response.status_code == 200
        assert response.json() == {
            "result_code": "UserNotInvited",
            "user_id": None,
            "verification_dispatch": None,
        }

    def test_missing_tenant_is_rejected(self, client):
        body = _registration()
        del body["tenant_id"]

        response = client.post("/guests", json=body)

        assert response.status_code == 422

    def test_resend_within_cooldown(self, client, container):
        _seed_invitation(client, container)
        client.post("/guests", json=_registration())

        response = client.post(
            "/guests/verification-email", json={"email": "guest@example.com"}
        )

        assert response.status_code == 200
        assert response.json()["result_code"] == "EmailRecentlySent"

    def test_verify_unknown_user(self, client):
        response = client.post(
            "/guests/verify", json={"email": "nobody@example.com", "code": "x"}
        )

        assert response.json()["result_code"] == "SuccessNoUser"


class TestSuperAdmin:
    def test_super_admin_lookup(self, client, container):
        users = _get(client, container, UserRepository)
        admin = client.portal.call(
            users.create,
            make_guest_user(email="admin@example.com", group_ids=frozenset({SUPER_ADMIN_GROUP_ID})),
        )

        response = client.get(f"/users/{admin.id}/super-admin")

        assert response.status_code == 200
        assert response.json() == {
            "user_id": str(admin.id),
            "is_super_admin": True,
            "is_last_super_admin": True,
        }

    def test_invalid_user_id(self, client):
        response = client.get("/users/not-a-uuid/super-admin")

        assert response.status_code == 422
