# taskmanager/application/use_cases/auth_use_cases.py

"""
Service for user authentication.

This module implements the session lifecycle: registration, login,
refresh-token rotation and logout. Access tokens are short-lived and never
persisted; refresh tokens are only trusted when their signature is valid AND
a matching, unrevoked, unexpired record exists in the credential store.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional

from taskmanager.application.ports.inbound.auth_port import IAuthUseCase
from taskmanager.application.ports.outbound.credential_store_port import ICredentialStore
from taskmanager.application.ports.outbound.token_service_port import IPasswordHasher, ITokenCodec
from taskmanager.domain.exceptions import (
    DomainException,
    DuplicateEmailException,
    InvalidCredentialsException,
    InvalidRefreshTokenException,
    InvalidRoleException,
    RefreshTokenExpiredException,
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
)
from taskmanager.domain.models.user import AuthResult, RefreshTokenRecord, TokenPair
from taskmanager.shared.utils.datetime_utils import DateTimeUtil

logger = logging.getLogger(__name__)


class AsyncAuthService(IAuthUseCase):
    """
    Application service for authentication-related operations.

    Responsibilities:
    - Register new users
    - Authenticate users and generate JWT tokens
    - Rotate refresh tokens
    - Revoke refresh tokens on logout
    """

    def __init__(self, store: ICredentialStore, codec: ITokenCodec, hasher: IPasswordHasher):
        self.store = store
        self.codec = codec
        self.hasher = hasher

    async def register(self, email: str, password: str, role_id: int) -> AuthResult:
        """
        Register a new user and open a session for it.

        Raises:
            DuplicateEmailException: Email already registered.
            InvalidRoleException: Role id does not exist.
        """
        if await self.store.get_user_by_email(email):
            logger.warning(f"Registration failed - duplicate email: {email}")
            raise DuplicateEmailException()

        if not await self.store.get_role(role_id):
            logger.warning(f"Registration failed - invalid role id: {role_id}")
            raise InvalidRoleException()

        password_hash = await self.hasher.hash_password(password)
        user = await self.store.create_user(email, password_hash, role_id)

        tokens = self._generate_token_pair(user.id)
        await self._save_refresh_token(user.id, tokens.refresh_token)

        logger.info(f"User registered successfully: {user.email}")
        return AuthResult(user=user.sanitized(), access_token=tokens.access_token,
                          refresh_token=tokens.refresh_token)

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate user and generate access and refresh tokens.

        Unknown email and wrong password fail identically.

        Raises:
            InvalidCredentialsException: If credentials are incorrect.
        """
        user = await self.store.get_user_by_email(email)

        if not user:
            await self.hasher.burn_verification(password)
            logger.warning(f"Authentication failed for email: {email}")
            raise InvalidCredentialsException()

        if not await self.hasher.verify_password(password, user.password_hash):
            logger.warning(f"Authentication failed for email: {email}")
            raise InvalidCredentialsException()

        tokens = self._generate_token_pair(user.id)
        await self._save_refresh_token(user.id, tokens.refresh_token)

        logger.info(f"User logged in successfully: {user.email}")
        return AuthResult(user=user.sanitized(), access_token=tokens.access_token,
                          refresh_token=tokens.refresh_token)

    async def refresh(self, refresh_token: str) -> AuthResult:
        """
        Validate a refresh token and issue a new pair, revoking the old record.

        Raises:
            RefreshTokenExpiredException: JWT or persisted record expired.
            InvalidRefreshTokenException: Bad token, unknown/revoked record,
                deleted owner, or a concurrent rotation already consumed it.
        """
        try:
            claims = self.codec.verify_refresh_token(refresh_token)
        except TokenExpiredError:
            raise RefreshTokenExpiredException()
        except TokenInvalidError:
            raise InvalidRefreshTokenException()

        record = await self.store.find_live_refresh_token(claims.user_id, claims.token_id)
        if not record:
            logger.warning(f"Refresh attempt with unknown or revoked token for user {claims.user_id}")
            raise InvalidRefreshTokenException()

        if record.is_expired(DateTimeUtil.utcnow()):
            logger.info(f"Refresh attempt with expired record for user {claims.user_id}")
            raise RefreshTokenExpiredException()

        user = await self.store.get_user(claims.user_id)
        if not user:
            raise InvalidRefreshTokenException()

        tokens = self._generate_token_pair(user.id)
        new_record = self._build_record(user.id, tokens.refresh_token)

        if not await self.store.rotate_refresh_token(user.id, record.id, new_record):
            logger.warning(f"Refresh token already consumed (concurrent rotation) for user {user.id}")
            raise InvalidRefreshTokenException()

        logger.info(f"Refresh token rotated for user {user.id}")
        return AuthResult(user=user.sanitized(), access_token=tokens.access_token,
                          refresh_token=tokens.refresh_token)

    async def logout(self, refresh_token: Optional[str]) -> bool:
        """
        Revoke the refresh token's record. Best effort: never raises.
        """
        if not refresh_token:
            return True
        try:
            claims = self.codec.verify_refresh_token(refresh_token)
            revoked = await self.store.revoke_refresh_tokens(claims.user_id, claims.token_id)
            logger.info(f"Logout for user {claims.user_id}: {revoked} refresh token(s) revoked")
        except TokenError as e:
            logger.info(f"Logout with unusable refresh token: {e}")
        except DomainException as e:
            logger.warning(f"Logout could not revoke refresh token: {e.message}")
        except Exception as e:
            # Banco fora do ar não impede o logout do lado do cliente
            logger.exception(f"Logout failed to reach the credential store: {e}")
        return True

    async def purge_stale_refresh_tokens(self, now: Optional[datetime] = None) -> int:
        """Delete revoked or expired refresh-token records."""
        removed = await self.store.purge_refresh_tokens(now or DateTimeUtil.utcnow())
        if removed:
            logger.info(f"Purged {removed} stale refresh token record(s)")
        return removed

    # ———— HELPERS ————

    def _generate_token_pair(self, user_id: uuid.UUID) -> TokenPair:
        token_id = str(uuid.uuid4())
        return TokenPair(
            access_token=self.codec.create_access_token(user_id),
            refresh_token=self.codec.create_refresh_token(user_id, token_id),
        )

    def _build_record(self, user_id: uuid.UUID, refresh_token: str) -> RefreshTokenRecord:
        claims = self.codec.verify_refresh_token(refresh_token)
        payload = self.codec.decode_unverified(refresh_token)
        return RefreshTokenRecord(
            id=claims.token_id,
            user_id=user_id,
            expires_at=DateTimeUtil.from_timestamp(payload["exp"]),
            revoked=False,
        )

    async def _save_refresh_token(self, user_id: uuid.UUID, refresh_token: str) -> RefreshTokenRecord:
        return await self.store.create_refresh_token(self._build_record(user_id, refresh_token))
