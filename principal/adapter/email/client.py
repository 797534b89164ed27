"""Email delivery adapter.

Verification emails are handed to an HTTP email service; the mock sender
records messages in memory for tests.
"""

import httpx
import logfire

from principal.domain.error import EmailDeliveryError
from principal.domain.service.verification_email_service import EmailSender

from .templates import EmailMessage, build_verification_link, render_verification_email


class HttpEmailSender(EmailSender):
    """Sends verification emails through an HTTP email service."""

    def __init__(
        self,
        service_url: str,
        web_client_url: str,
        sender: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP email sender.

        Args:
            service_url: Base URL of the email service
            web_client_url: Base URL of the web client used in links
            sender: From address
            timeout_seconds: Per-request timeout
            transport: Optional httpx transport, used to stub the service in tests
        """
        self.service_url = service_url.rstrip("/")
        self.web_client_url = web_client_url
        self.sender = sender
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def send_verification_email(
        self, email: str, first_name: str, code: str, redirect_url: str | None
    ) -> None:
        """Render and post a verification email.

        Raises:
            EmailDeliveryError: If the service is unreachable or rejects the message
        """
        link = build_verification_link(self.web_client_url, email, code, redirect_url)
        message = render_verification_email(self.sender, email, first_name, link)
        await self._post(message)

    async def _post(self, message: EmailMessage) -> None:
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    f"{self.service_url}/v1/emails",
                    json={
                        "from": message.sender,
                        "to": [message.recipient],
                        "subject": message.subject,
                        "text": message.text_body,
                        "html": message.html_body,
                    },
                    timeout=self.timeout_seconds,
                )

                if response.status_code >= 300:
                    logfire.error(
                        "Email service rejected message",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise EmailDeliveryError(
                        f"Email service returned {response.status_code}"
                    )

        except httpx.HTTPError as e:
            logfire.error("Email service HTTP error", error=str(e))
            raise EmailDeliveryError(f"HTTP error sending email: {e}") from e

        logfire.info("Email handed to email service", recipient=message.recipient)


class MockEmailSender(EmailSender):
    """Mock email sender for testing.

    Records every message instead of sending it. Set ``fail`` to make the
    next sends raise EmailDeliveryError.
    """

    def __init__(self, web_client_url: str = "http://localhost:3000") -> None:
        self.web_client_url = web_client_url
        self.sent: list[EmailMessage] = []
        self.codes: list[str] = []
        self.fail = False

    async def send_verification_email(
        self, email: str, first_name: str, code: str, redirect_url: str | None
    ) -> None:
        if self.fail:
            raise EmailDeliveryError(f"Mock delivery failure for {email}")
        link = build_verification_link(self.web_client_url, email, code, redirect_url)
        self.sent.append(
            render_verification_email("no-reply@localhost", email, first_name, link)
        )
        self.codes.append(code)

    @property
    def last_code(self) -> str | None:
        return self.codes[-1] if self.codes else None
