# taskmanager/application/ports/outbound/credential_store_port.py

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from taskmanager.domain.models.user import Role, User, UserChanges, RefreshTokenRecord


class ICredentialStore(ABC):
    """Persistence interface for users, roles and refresh-token records."""

    # Users

    @abstractmethod
    async def get_user(self, user_id: UUID) -> Optional[User]:
        """Return the user with its role loaded, or None."""

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def create_user(self, email: str, password_hash: str, role_id: int) -> User:
        pass

    @abstractmethod
    async def update_user(self, user_id: UUID, changes: UserChanges) -> Optional[User]:
        """Apply the changes (password already hashed). Returns None when the user is missing."""

    @abstractmethod
    async def delete_user(self, user_id: UUID) -> bool:
        pass

    @abstractmethod
    async def list_users(self) -> List[User]:
        """All users ordered by email ascending."""

    # Roles

    @abstractmethod
    async def get_role(self, role_id: int) -> Optional[Role]:
        pass

    @abstractmethod
    async def get_role_by_name(self, name: str) -> Optional[Role]:
        pass

    @abstractmethod
    async def create_role(self, name: str, role_id: Optional[int] = None) -> Role:
        pass

    @abstractmethod
    async def list_roles(self) -> List[Role]:
        """All roles ordered by id."""

    # Refresh tokens

    @abstractmethod
    async def create_refresh_token(self, record: RefreshTokenRecord) -> RefreshTokenRecord:
        pass

    @abstractmethod
    async def find_live_refresh_token(self, user_id: UUID, token_id: str) -> Optional[RefreshTokenRecord]:
        """Record matching (user_id, token_id) with revoked == False, ignoring expiry."""

    @abstractmethod
    async def revoke_refresh_tokens(self, user_id: UUID, token_id: str) -> int:
        """Revoke matching non-revoked records. Returns how many changed."""

    @abstractmethod
    async def rotate_refresh_token(self, user_id: UUID, old_token_id: str,
                                   new_record: RefreshTokenRecord) -> bool:
        """
        Revoke the old record and store the new one atomically.

        Returns False, storing nothing, when the old record was already
        revoked (a concurrent rotation or logout won).
        """

    @abstractmethod
    async def purge_refresh_tokens(self, now: datetime) -> int:
        """Delete revoked or expired records. Returns how many were removed."""
