"""User use cases."""

from principal.application.usecase.user.check_super_admin import (
    CheckSuperAdminRequest,
    CheckSuperAdminResponse,
    CheckSuperAdminUseCase,
)

__all__ = [
    "CheckSuperAdminRequest",
    "CheckSuperAdminResponse",
    "CheckSuperAdminUseCase",
]
