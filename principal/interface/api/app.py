"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI

from principal.interface.api.routes import guests, health, users
from principal.util.di.container import create_container, setup_di
from principal.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it and passes a mock-backed container.

    Args:
        container: DI container to use; the production container when None
    """
    app_instance = FastAPI(
        title="Principal Guest Service",
        description="Guest account provisioning, email verification and license assignment",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(guests.router)
    app_instance.include_router(users.router)

    return app_instance
