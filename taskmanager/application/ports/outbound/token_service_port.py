# taskmanager/application/ports/outbound/token_service_port.py

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Dict, Any
from uuid import UUID


@dataclass(frozen=True)
class AccessTokenClaims:
    user_id: UUID


@dataclass(frozen=True)
class RefreshTokenClaims:
    user_id: UUID
    token_id: str


class ITokenCodec(ABC):
    """
    Token handling interface.

    verify_* raise TokenExpiredError when the signature is valid but the
    token has expired, and TokenInvalidError for anything else.
    """

    @abstractmethod
    def create_access_token(self, user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
        pass

    @abstractmethod
    def create_refresh_token(self, user_id: UUID, token_id: str,
                             expires_delta: Optional[timedelta] = None) -> str:
        pass

    @abstractmethod
    def verify_access_token(self, token: str) -> AccessTokenClaims:
        pass

    @abstractmethod
    def verify_refresh_token(self, token: str) -> RefreshTokenClaims:
        pass

    @abstractmethod
    def decode_unverified(self, token: str) -> Dict[str, Any]:
        """Read claims without checking the signature. Bookkeeping only."""


class IPasswordHasher(ABC):
    """Password hashing interface."""

    @abstractmethod
    async def hash_password(self, password: str) -> str:
        pass

    @abstractmethod
    async def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        pass

    @abstractmethod
    async def burn_verification(self, plain_password: str) -> None:
        """Run one throwaway verification so unknown accounts cost the same as known ones."""
