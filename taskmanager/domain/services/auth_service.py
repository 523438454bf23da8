# taskmanager/domain/services/auth_service.py

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, Iterable

from taskmanager.domain.exceptions import (
    PermissionDeniedException,
    UnauthenticatedException,
)
from taskmanager.domain.models.user import User

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class AuthService:
    """
    Domain service for authentication-related business logic.
    """

    @staticmethod
    def create_token_payload(
            subject: str,
            expires_delta: timedelta,
            token_type: str,
            additional_claims: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Create a token payload with standard claims.

        Args:
            subject: The subject of the token (user ID)
            expires_delta: Token expiration time delta
            token_type: Type of token ("access" or "refresh")
            additional_claims: Additional claims to include in token

        Returns:
            Dict with all token claims
        """
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + expires_delta).timestamp()),
            "type": token_type,
        }

        if additional_claims:
            payload.update(additional_claims)

        return payload

    @staticmethod
    def is_token_valid(token_payload: Dict[str, Any], expected_type: str,
                       required_claims: Iterable[str] = ("sub",)) -> bool:
        """
        Validate a decoded token's type and required claims.

        Expiry is checked by the JWT library before this point.
        """
        if token_payload.get("type") != expected_type:
            return False
        return all(token_payload.get(claim) for claim in required_claims)

    @staticmethod
    def authorize(user: Optional[User], allowed_roles: Iterable[str]) -> User:
        """
        Check that an authenticated user holds one of the allowed roles.

        Raises:
            UnauthenticatedException: No user on the request
            PermissionDeniedException: The user's role is not allowed
        """
        if user is None:
            raise UnauthenticatedException("Authentication required")
        if user.role_name not in set(allowed_roles):
            raise PermissionDeniedException()
        return user

    @staticmethod
    def is_admin(user: User, admin_role_id: int) -> bool:
        return user.role_id == admin_role_id
