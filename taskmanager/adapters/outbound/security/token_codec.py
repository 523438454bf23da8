# taskmanager/adapters/outbound/security/token_codec.py

"""
JWT codec for access and refresh tokens.

Access and refresh tokens are signed with different secrets, so a token of
one kind can never be verified as the other even before the "type" claim is
inspected.
"""

import logging
from datetime import timedelta
from typing import Optional, Dict, Any
from uuid import UUID

from jose import jwt, JWTError, ExpiredSignatureError

from taskmanager.adapters.configuration.config import Settings
from taskmanager.application.ports.outbound.token_service_port import (
    AccessTokenClaims,
    ITokenCodec,
    RefreshTokenClaims,
)
from taskmanager.domain.exceptions import TokenExpiredError, TokenInvalidError
from taskmanager.domain.services.auth_service import (
    ACCESS_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    AuthService,
)

# Configurar logger
logger = logging.getLogger(__name__)


class JWTTokenCodec(ITokenCodec):
    """
    Token codec backed by python-jose.

    Responsibilities:
    - Access and refresh token creation
    - Signature, expiry, type and claim validation
    """

    def __init__(
            self,
            access_secret: str,
            refresh_secret: str,
            access_lifetime: timedelta,
            refresh_lifetime: timedelta,
            algorithm: str = "HS256",
    ):
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self.access_lifetime = access_lifetime
        self.refresh_lifetime = refresh_lifetime
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, settings: Settings) -> "JWTTokenCodec":
        return cls(
            access_secret=settings.JWT_ACCESS_SECRET.get_secret_value(),
            refresh_secret=settings.JWT_REFRESH_SECRET.get_secret_value(),
            access_lifetime=settings.access_token_lifetime,
            refresh_lifetime=settings.refresh_token_lifetime,
            algorithm=settings.JWT_ALGORITHM,
        )

    # ———— ACCESS TOKEN METHODS ————

    def create_access_token(self, user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
        """Create an access token for authentication."""
        payload = AuthService.create_token_payload(
            subject=str(user_id),
            expires_delta=expires_delta if expires_delta is not None else self.access_lifetime,
            token_type=ACCESS_TOKEN_TYPE,
        )
        token = jwt.encode(payload, self._access_secret, algorithm=self.algorithm)
        logger.debug(f"Access token created for subject={user_id}")
        return token

    def verify_access_token(self, token: str) -> AccessTokenClaims:
        """Validate an access token. Raises TokenExpiredError or TokenInvalidError."""
        payload = self._decode(token, self._access_secret, ACCESS_TOKEN_TYPE, ("sub",))
        return AccessTokenClaims(user_id=self._parse_subject(payload))

    # ———— REFRESH TOKEN METHODS ————

    def create_refresh_token(self, user_id: UUID, token_id: str,
                             expires_delta: Optional[timedelta] = None) -> str:
        """Create a refresh token embedding the id of its persisted record."""
        payload = AuthService.create_token_payload(
            subject=str(user_id),
            expires_delta=expires_delta if expires_delta is not None else self.refresh_lifetime,
            token_type=REFRESH_TOKEN_TYPE,
            additional_claims={"jti": token_id},
        )
        token = jwt.encode(payload, self._refresh_secret, algorithm=self.algorithm)
        logger.debug(f"Refresh token created for subject={user_id}")
        return token

    def verify_refresh_token(self, token: str) -> RefreshTokenClaims:
        """Validate a refresh token. Raises TokenExpiredError or TokenInvalidError."""
        payload = self._decode(token, self._refresh_secret, REFRESH_TOKEN_TYPE, ("sub", "jti"))
        return RefreshTokenClaims(user_id=self._parse_subject(payload), token_id=str(payload["jti"]))

    def decode_unverified(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.get_unverified_claims(token)
        except JWTError as e:
            raise TokenInvalidError(str(e)) from e

    # ———— HELPERS ————

    def _decode(self, token: str, secret: str, expected_type: str, required_claims) -> Dict[str, Any]:
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            logger.info("Expired %s token presented", expected_type)
            raise TokenExpiredError(str(e)) from e
        except JWTError as e:
            logger.warning("Invalid %s token: %s", expected_type, str(e))
            raise TokenInvalidError(str(e)) from e

        if not AuthService.is_token_valid(payload, expected_type, required_claims):
            logger.warning("Token with incorrect type or missing claims: type=%s", payload.get("type"))
            raise TokenInvalidError(f"Invalid {expected_type} token.")
        return payload

    @staticmethod
    def _parse_subject(payload: Dict[str, Any]) -> UUID:
        try:
            return UUID(str(payload["sub"]))
        except ValueError as e:
            raise TokenInvalidError("Invalid token subject.") from e
