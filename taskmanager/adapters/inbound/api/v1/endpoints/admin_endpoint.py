# taskmanager/adapters/inbound/api/v1/endpoints/admin_endpoint.py

"""
Administrative user management. Every route requires the admin role id.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, status
from fastapi_pagination import Page, Params, paginate

from taskmanager.adapters.inbound.api.deps import get_user_service, require_admin
from taskmanager.application.dtos.base_dto import ApiResponse, MessageResponse
from taskmanager.application.dtos.user_dto import (
    AdminUserCreate,
    RoleOutput,
    RolesData,
    UserData,
    UserOutput,
    UserUpdate,
)
from taskmanager.application.use_cases.user_use_cases import AsyncUserService
from taskmanager.domain.models.user import UserChanges
from taskmanager.shared.utils.error_responses import admin_errors
from taskmanager.shared.utils.pagination import pagination_params

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
    responses=admin_errors,
)


@router.get(
    "/users",
    response_model=Page[UserOutput],
    summary="List users",
    description="Paginated list of users ordered by email.",
)
async def list_users(
        params: Params = Depends(pagination_params),
        service: AsyncUserService = Depends(get_user_service),
):
    users = await service.list_users()
    return paginate([UserOutput.model_validate(u) for u in users], params)


@router.get(
    "/users/{user_id}",
    response_model=ApiResponse[UserData],
    summary="Get a user",
)
async def get_user(
        user_id: UUID,
        service: AsyncUserService = Depends(get_user_service),
):
    user = await service.get_user(user_id)
    return ApiResponse[UserData](data=UserData(user=UserOutput.model_validate(user)))


@router.post(
    "/users",
    response_model=ApiResponse[UserData],
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
async def create_user(
        user_input: AdminUserCreate,
        service: AsyncUserService = Depends(get_user_service),
):
    user = await service.create_user(user_input.email, user_input.password, user_input.role_id)
    return ApiResponse[UserData](
        message="User created successfully",
        data=UserData(user=UserOutput.model_validate(user)),
    )


@router.patch(
    "/users/{user_id}",
    response_model=ApiResponse[UserData],
    summary="Update a user",
    description="Partial update of email, password and role.",
)
async def update_user(
        user_id: UUID,
        user_input: UserUpdate,
        service: AsyncUserService = Depends(get_user_service),
):
    changes = UserChanges.from_mapping(user_input.model_dump(exclude_unset=True))
    user = await service.update_user(user_id, changes)
    return ApiResponse[UserData](
        message="User updated successfully",
        data=UserData(user=UserOutput.model_validate(user)),
    )


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user",
)
async def delete_user(
        user_id: UUID,
        service: AsyncUserService = Depends(get_user_service),
):
    await service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")


@router.get(
    "/roles",
    response_model=ApiResponse[RolesData],
    summary="List roles",
)
async def list_roles(service: AsyncUserService = Depends(get_user_service)):
    roles = await service.list_roles()
    return ApiResponse[RolesData](data=RolesData(roles=[RoleOutput.model_validate(r) for r in roles]))
