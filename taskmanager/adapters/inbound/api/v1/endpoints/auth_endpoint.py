# taskmanager/adapters/inbound/api/v1/endpoints/auth_endpoint.py

"""
Authentication endpoints.

The refresh token travels in an httpOnly cookie; the access token is returned
in the body and sent back by clients as "Authorization: Bearer <token>".
Domain errors propagate to the application's exception handlers, which render
the error envelope with the matching status code.
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status

from taskmanager.adapters.configuration.config import Settings
from taskmanager.adapters.inbound.api.deps import (
    get_auth_service,
    get_cookie_manager,
    get_credential_store,
    get_current_user,
    get_settings,
)
from taskmanager.adapters.outbound.security.jwt_cookies import RefreshCookieManager
from taskmanager.application.dtos.base_dto import ApiResponse, MessageResponse
from taskmanager.application.dtos.user_dto import (
    AuthData,
    CurrentUserData,
    SessionUserOutput,
    UserCreate,
    UserLogin,
)
from taskmanager.application.ports.outbound.credential_store_port import ICredentialStore
from taskmanager.application.use_cases.auth_use_cases import AsyncAuthService
from taskmanager.domain.exceptions import InvalidRoleException, RefreshTokenMissingException
from taskmanager.domain.models.user import User
from taskmanager.shared.utils.error_responses import auth_errors, unauthorized_error
from taskmanager.shared.utils.success_responses import auth_success, common_success

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


def _session_user(user: User) -> SessionUserOutput:
    return SessionUserOutput(id=user.id, email=user.email, role=user.role_name)


@router.post(
    "/register",
    response_model=ApiResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Registers a new user, opens a session and sets the refresh token cookie.",
    responses={201: auth_success[201], **auth_errors}
)
async def register_user(
        user_input: UserCreate,
        response: Response,
        service: AsyncAuthService = Depends(get_auth_service),
        store: ICredentialStore = Depends(get_credential_store),
        cookies: RefreshCookieManager = Depends(get_cookie_manager),
        settings: Settings = Depends(get_settings),
):
    role_id = user_input.role_id
    if role_id is None:
        default_role = await store.get_role_by_name(settings.DEFAULT_ROLE_NAME)
        if not default_role:
            raise InvalidRoleException()
        role_id = default_role.id

    result = await service.register(user_input.email, user_input.password, role_id)
    cookies.set_refresh_token_cookie(response, result.refresh_token)

    return ApiResponse[AuthData](
        message="User registered successfully",
        data=AuthData(
            user=_session_user(result.user),
            access_token=result.access_token,
            refresh_token=result.refresh_token,
        ),
    )


@router.post(
    "/login",
    response_model=ApiResponse[AuthData],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Login user",
    description="Authenticates user credentials, returns an access token and sets the refresh token cookie.",
    responses={200: auth_success[200], **auth_errors}
)
async def login_user(
        user_input: UserLogin,
        response: Response,
        service: AsyncAuthService = Depends(get_auth_service),
        cookies: RefreshCookieManager = Depends(get_cookie_manager),
):
    result = await service.login(user_input.email, user_input.password)
    cookies.set_refresh_token_cookie(response, result.refresh_token)

    # O refresh token fica apenas no cookie
    return ApiResponse[AuthData](
        message="Login successful",
        data=AuthData(user=_session_user(result.user), access_token=result.access_token),
    )


@router.post(
    "/refresh-token",
    response_model=ApiResponse[AuthData],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Refresh authentication token",
    description="Rotates the refresh token cookie and returns a new access token.",
    responses=auth_errors
)
async def refresh_token(
        request: Request,
        response: Response,
        service: AsyncAuthService = Depends(get_auth_service),
        cookies: RefreshCookieManager = Depends(get_cookie_manager),
):
    token = cookies.get_refresh_token(request)
    if not token:
        raise RefreshTokenMissingException()

    result = await service.refresh(token)
    cookies.set_refresh_token_cookie(response, result.refresh_token)

    return ApiResponse[AuthData](
        data=AuthData(user=_session_user(result.user), access_token=result.access_token),
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout user",
    description="Revokes the refresh token (if any) and clears its cookie. Always succeeds.",
    responses=common_success
)
async def logout_user(
        request: Request,
        response: Response,
        service: AsyncAuthService = Depends(get_auth_service),
        cookies: RefreshCookieManager = Depends(get_cookie_manager),
):
    await service.logout(cookies.get_refresh_token(request))
    cookies.clear_refresh_token_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=ApiResponse[CurrentUserData],
    response_model_exclude_none=True,
    summary="Current user",
    description="Returns the user authenticated by the bearer access token.",
    responses=unauthorized_error
)
async def get_me(user: User = Depends(get_current_user)):
    return ApiResponse[CurrentUserData](data=CurrentUserData(user=_session_user(user)))
