"""Observability configuration using Logfire.

Usage:
    import logfire

    # Structured logging
    logfire.info("Guest user provisioned", user_id=str(user.id))

    # Manual spans for critical operations
    with logfire.span("guest_verification_service.verify_guest", email=email):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from principal.config import Settings
from principal.util.error import ConfigurationError


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Cloud sending is enabled when OBSERVABILITY__SEND_TO_LOGFIRE is true, or
    when it is unset and OBSERVABILITY__LOGFIRE_TOKEN is present. Otherwise
    output only goes to the console.

    Args:
        settings: Application settings

    Raises:
        ConfigurationError: If cloud sending is forced on in production
            without a token
    """
    observability = settings.observability
    if observability.send_to_logfire is not None:
        send_to_logfire = observability.send_to_logfire
    else:
        send_to_logfire = bool(observability.logfire_token)

    if (
        send_to_logfire
        and not observability.logfire_token
        and settings.environment == "production"
    ):
        raise ConfigurationError(
            "OBSERVABILITY__SEND_TO_LOGFIRE is set but OBSERVABILITY__LOGFIRE_TOKEN is missing"
        )

    config_kwargs = {
        "service_name": "principal-guest-service",
        "service_version": settings.git_sha,
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    }

    if observability.logfire_token:
        config_kwargs["token"] = observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(observability.logfire_token),
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Instrument FastAPI application with Logfire.

    Args:
        app: FastAPI application instance
    """
    logfire.instrument_fastapi(app, capture_headers=False)
    logfire.info("FastAPI instrumented")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Instrument SQLAlchemy engine with Logfire.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(
        engine=engine.sync_engine,
        enable_commenter=True,  # Add SQL comments with span context
    )
    logfire.info("SQLAlchemy instrumented")


def instrument_httpx() -> None:
    """Instrument outbound httpx requests (the email service client)."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
