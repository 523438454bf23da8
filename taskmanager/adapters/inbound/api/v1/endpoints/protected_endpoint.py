# taskmanager/adapters/inbound/api/v1/endpoints/protected_endpoint.py

from fastapi import APIRouter, Depends

from taskmanager.adapters.inbound.api.deps import get_current_user, require_roles
from taskmanager.application.dtos.base_dto import ApiResponse
from taskmanager.application.dtos.user_dto import CurrentUserData, SessionUserOutput
from taskmanager.domain.models.user import User
from taskmanager.shared.utils.error_responses import forbidden_error, unauthorized_error

router = APIRouter(
    prefix="/protected",
    tags=["Protected"],
)


@router.get(
    "/user",
    response_model=ApiResponse[CurrentUserData],
    summary="Any authenticated user",
    responses=unauthorized_error
)
async def user_route(user: User = Depends(get_current_user)):
    return ApiResponse[CurrentUserData](
        message="You have access to this protected route",
        data=CurrentUserData(user=SessionUserOutput(id=user.id, email=user.email, role=user.role_name)),
    )


@router.get(
    "/admin",
    response_model=ApiResponse[CurrentUserData],
    summary="ADMIN role only",
    responses={**unauthorized_error, **forbidden_error}
)
async def admin_route(user: User = Depends(require_roles("ADMIN"))):
    return ApiResponse[CurrentUserData](
        message="You have access to this admin route",
        data=CurrentUserData(user=SessionUserOutput(id=user.id, email=user.email, role=user.role_name)),
    )
