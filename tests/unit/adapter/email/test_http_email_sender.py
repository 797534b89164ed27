"""Unit tests for HttpEmailSender using a stubbed transport."""

import json

import httpx
import pytest

from principal.adapter.email import HttpEmailSender
from principal.domain.error import EmailDeliveryError


def _sender(handler) -> HttpEmailSender:
    return HttpEmailSender(
        service_url="https://mail.example.com/",
        web_client_url="https://app.example.com",
        sender="no-reply@example.com",
        transport=httpx.MockTransport(handler),
    )


class TestHttpEmailSender:
    @pytest.mark.asyncio
    async def test_posts_rendered_message(self):
        captured = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(202, json={"id": "msg-1"})

        await _sender(handler).send_verification_email(
            "guest@example.com", "Grace", "abc123", None
        )

        assert len(captured) == 1
        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == "https://mail.example.com/v1/emails"
        body = json.loads(request.content)
        assert body["from"] == "no-reply@example.com"
        assert body["to"] == ["guest@example.com"]
        assert "token=abc123" in body["text"]
        assert "email=guest%40example.com" in body["html"]

    @pytest.mark.asyncio
    async def test_rejection_raises_delivery_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="mailbox on fire")

        with pytest.raises(EmailDeliveryError, match="500"):
            await _sender(handler).send_verification_email(
                "guest@example.com", "Grace", "abc123", None
            )

    @pytest.mark.asyncio
    async def test_connection_error_raises_delivery_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(EmailDeliveryError):
            await _sender(handler).send_verification_email(
                "guest@example.com", "Grace", "abc123", "/home"
            )
