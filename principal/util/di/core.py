"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from principal.config import (
    EmailSettings,
    GuestSettings,
    Settings,
    VerificationSettings,
)
from principal.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_guest_settings(self, settings: Settings) -> GuestSettings:
        """Provide guest provisioning settings."""
        return settings.guest

    @provide(scope=Scope.APP)
    def provide_verification_settings(
        self, settings: Settings
    ) -> VerificationSettings:
        """Provide verification policy settings."""
        return settings.verification

    @provide(scope=Scope.APP)
    def provide_email_settings(self, settings: Settings) -> EmailSettings:
        """Provide email settings."""
        return settings.email
