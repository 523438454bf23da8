# taskmanager/adapters/inbound/api/deps.py

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via
FastAPI Depends() for authentication, authorization, and store access.
Stores are built per request from a database session; tests replace
get_credential_store / get_task_store through app.dependency_overrides.
"""

import logging
from typing import Optional

from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from taskmanager.adapters.configuration.config import Settings
from taskmanager.adapters.outbound.persistence.database import get_db
from taskmanager.adapters.outbound.persistence.repositories.credential_repository import (
    SQLAlchemyCredentialStore,
)
from taskmanager.adapters.outbound.persistence.repositories.task_repository import SQLAlchemyTaskStore
from taskmanager.adapters.outbound.security.jwt_cookies import RefreshCookieManager
from taskmanager.application.ports.outbound.credential_store_port import ICredentialStore
from taskmanager.application.ports.outbound.task_store_port import ITaskStore
from taskmanager.application.ports.outbound.token_service_port import IPasswordHasher, ITokenCodec
from taskmanager.application.use_cases.auth_use_cases import AsyncAuthService
from taskmanager.application.use_cases.comment_use_cases import AsyncCommentService
from taskmanager.application.use_cases.task_use_cases import AsyncTaskService
from taskmanager.application.use_cases.user_use_cases import AsyncUserService
from taskmanager.domain.exceptions import (
    AccessTokenExpiredException,
    PermissionDeniedException,
    TokenExpiredError,
    TokenInvalidError,
    UnauthenticatedException,
)
from taskmanager.domain.models.user import User
from taskmanager.domain.services.auth_service import AuthService

# Configure logger
logger = logging.getLogger(__name__)

# Apenas para a documentação OpenAPI; o header é validado manualmente
bearer_scheme = HTTPBearer(auto_error=False)

BEARER_PREFIX = "Bearer "


########################################################################
# Application components
########################################################################


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_codec(request: Request) -> ITokenCodec:
    return request.app.state.token_codec


def get_password_hasher(request: Request) -> IPasswordHasher:
    return request.app.state.password_hasher


def get_cookie_manager(request: Request) -> RefreshCookieManager:
    return request.app.state.cookie_manager


########################################################################
# Stores and services
########################################################################


async def get_credential_store(db: AsyncSession = Depends(get_db)) -> ICredentialStore:
    return SQLAlchemyCredentialStore(db)


async def get_task_store(db: AsyncSession = Depends(get_db)) -> ITaskStore:
    return SQLAlchemyTaskStore(db)


def get_auth_service(
        store: ICredentialStore = Depends(get_credential_store),
        codec: ITokenCodec = Depends(get_token_codec),
        hasher: IPasswordHasher = Depends(get_password_hasher),
) -> AsyncAuthService:
    return AsyncAuthService(store, codec, hasher)


def get_user_service(
        store: ICredentialStore = Depends(get_credential_store),
        hasher: IPasswordHasher = Depends(get_password_hasher),
) -> AsyncUserService:
    return AsyncUserService(store, hasher)


def get_task_service(store: ITaskStore = Depends(get_task_store)) -> AsyncTaskService:
    return AsyncTaskService(store)


def get_comment_service(store: ITaskStore = Depends(get_task_store)) -> AsyncCommentService:
    return AsyncCommentService(store)


########################################################################
# User Token Authentication
########################################################################


async def get_current_user(
        request: Request,
        _credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
        store: ICredentialStore = Depends(get_credential_store),
        codec: ITokenCodec = Depends(get_token_codec),
) -> User:
    """
    Get the current user from the bearer access token.

    The header must be exactly "Bearer <token>". The loaded user is also
    attached to request.state.user.

    Raises:
        UnauthenticatedException: Missing/malformed header, invalid token, unknown user
        AccessTokenExpiredException: Valid signature but expired token
    """
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise UnauthenticatedException()

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise UnauthenticatedException()

    try:
        claims = codec.verify_access_token(token)
    except TokenExpiredError:
        raise AccessTokenExpiredException()
    except TokenInvalidError:
        raise UnauthenticatedException("Invalid token. Please log in again.")

    user = await store.get_user(claims.user_id)
    if not user:
        logger.warning(f"Access token for unknown user {claims.user_id}")
        raise UnauthenticatedException("User not found or token is invalid")

    user = user.sanitized()
    request.state.user = user
    return user


def require_roles(*role_names: str):
    """
    Dependency factory: the current user must hold one of the given role names.
    """

    async def _checker(user: User = Depends(get_current_user)) -> User:
        try:
            return AuthService.authorize(user, role_names)
        except PermissionDeniedException:
            logger.warning(f"User {user.id} with role {user.role_name} denied; requires {role_names}")
            raise

    return _checker


async def require_admin(
        user: User = Depends(get_current_user),
        settings: Settings = Depends(get_settings),
) -> User:
    """The current user must hold the configured admin role id."""
    if not AuthService.is_admin(user, settings.ADMIN_ROLE_ID):
        logger.warning(f"User {user.id} tried to access an admin route")
        raise PermissionDeniedException("Access denied: Admin privileges required")
    return user
