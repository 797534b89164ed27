"""Super-admin check use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from principal.application.usecase.base import BaseUseCase
from principal.domain.service import SuperAdminService
from principal.domain.value import UserId


class CheckSuperAdminRequest(BaseModel):
    """Super-admin check request."""

    user_id: UUID


class CheckSuperAdminResponse(BaseModel):
    """Super-admin check response."""

    user_id: str
    is_super_admin: bool
    is_last_super_admin: bool


class CheckSuperAdminUseCase(BaseUseCase):
    """Use case for answering super-admin membership questions.

    Privileged operations call this before acting on tenant-wide state;
    ``is_last_super_admin`` guards removing the final administrator.
    """

    def __init__(self, super_admin_service: SuperAdminService) -> None:
        self.super_admin_service = super_admin_service

    async def execute(self, request: CheckSuperAdminRequest) -> CheckSuperAdminResponse:
        with logfire.span("check_super_admin.execute", user_id=str(request.user_id)):
            user_id = UserId(request.user_id)
            is_super_admin = await self.super_admin_service.is_super_admin(user_id)
            is_last = (
                await self.super_admin_service.is_last_super_admin(user_id)
                if is_super_admin
                else False
            )
            return CheckSuperAdminResponse(
                user_id=str(user_id),
                is_super_admin=is_super_admin,
                is_last_super_admin=is_last,
            )
