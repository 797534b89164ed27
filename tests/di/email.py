"""Mock email providers for testing."""

from dishka import Scope, alias, provide

from principal.adapter.email import MockEmailSender
from principal.domain.service import EmailSender
from principal.util.di.infrastructure.email import EmailProvider


class MockEmailProvider(EmailProvider):
    """Mock email provider recording messages in memory."""

    __is_mock__ = True

    email_sender = alias(source=MockEmailSender, provides=EmailSender)

    @provide(scope=Scope.APP)
    def get_mock_email_sender(self) -> MockEmailSender:
        """Provide recording email sender."""
        return MockEmailSender()
