"""Email infrastructure providers."""

from dishka import Scope, provide

from principal.adapter.email import HttpEmailSender
from principal.config import EmailSettings
from principal.domain.service import EmailSender
from principal.util.di.base import ProviderBase
from principal.util.observability import instrument_httpx


class EmailProvider(ProviderBase):
    """Email component base."""

    __mock_component__ = "email"


class ProdEmailProvider(EmailProvider):
    """Production email provider sending through the HTTP email service."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_email_sender(self, email_settings: EmailSettings) -> EmailSender:
        """Provide the HTTP email sender."""
        instrument_httpx()
        return HttpEmailSender(
            service_url=email_settings.service_url,
            web_client_url=email_settings.web_client_url,
            sender=email_settings.sender,
            timeout_seconds=email_settings.timeout_seconds,
        )
