"""User routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from principal.application.usecase.user import (
    CheckSuperAdminRequest,
    CheckSuperAdminResponse,
    CheckSuperAdminUseCase,
)

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{user_id}/super-admin", response_model=CheckSuperAdminResponse)
async def check_super_admin(
    user_id: UUID,
    check_super_admin_use_case: FromDishka[CheckSuperAdminUseCase],
) -> CheckSuperAdminResponse:
    """Report whether a user is a super admin.

    Unknown users are reported as not being super admins.
    """
    return await check_super_admin_use_case.execute(
        CheckSuperAdminRequest(user_id=user_id)
    )
