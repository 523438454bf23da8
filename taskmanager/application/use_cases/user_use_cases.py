# taskmanager/application/use_cases/user_use_cases.py

"""
Administrative user management.

Callers are expected to have passed the admin gate; this service does not
re-check the caller's role.
"""

import logging
from typing import List
from uuid import UUID

from taskmanager.application.ports.outbound.credential_store_port import ICredentialStore
from taskmanager.application.ports.outbound.token_service_port import IPasswordHasher
from taskmanager.domain.exceptions import (
    DuplicateEmailException,
    InvalidRoleException,
    ResourceNotFoundException,
)
from taskmanager.domain.models.user import Role, User, UserChanges

logger = logging.getLogger(__name__)


class AsyncUserService:
    """Application service for admin user management."""

    def __init__(self, store: ICredentialStore, hasher: IPasswordHasher):
        self.store = store
        self.hasher = hasher

    async def list_users(self) -> List[User]:
        return [user.sanitized() for user in await self.store.list_users()]

    async def get_user(self, user_id: UUID) -> User:
        user = await self.store.get_user(user_id)
        if not user:
            raise ResourceNotFoundException("User not found", resource_id=user_id)
        return user.sanitized()

    async def create_user(self, email: str, password: str, role_id: int) -> User:
        if await self.store.get_user_by_email(email):
            raise DuplicateEmailException()
        if not await self.store.get_role(role_id):
            raise InvalidRoleException()

        password_hash = await self.hasher.hash_password(password)
        user = await self.store.create_user(email, password_hash, role_id)
        logger.info(f"User {user.email} created by admin")
        return user.sanitized()

    async def update_user(self, user_id: UUID, changes: UserChanges) -> User:
        user = await self.store.get_user(user_id)
        if not user:
            raise ResourceNotFoundException("User not found", resource_id=user_id)

        if changes.has("email") and changes.email != user.email:
            if await self.store.get_user_by_email(changes.email):
                raise DuplicateEmailException("Email already in use")

        if changes.has("role_id") and not await self.store.get_role(changes.role_id):
            raise InvalidRoleException()

        if changes.has("password"):
            changes = UserChanges(
                email=changes.email,
                password=await self.hasher.hash_password(changes.password),
                role_id=changes.role_id,
                fields_set=changes.fields_set,
            )

        updated = await self.store.update_user(user_id, changes)
        if not updated:
            raise ResourceNotFoundException("User not found", resource_id=user_id)
        logger.info(f"User {user_id} updated by admin: {sorted(changes.fields_set)}")
        return updated.sanitized()

    async def delete_user(self, user_id: UUID) -> None:
        if not await self.store.delete_user(user_id):
            raise ResourceNotFoundException("User not found", resource_id=user_id)
        logger.info(f"User {user_id} deleted by admin")

    async def list_roles(self) -> List[Role]:
        return await self.store.list_roles()
