# taskmanager/adapters/outbound/persistence/repositories/credential_repository.py

"""
SQLAlchemy implementation of the credential store.

Users, roles and refresh-token records share one session so a refresh-token
rotation (revoke old + insert new) commits as a single transaction.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, or_, text, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.future import select

from taskmanager.adapters.outbound.persistence.models.user_model import (
    RefreshTokenModel,
    RoleModel,
    UserModel,
)
from taskmanager.adapters.outbound.persistence.repositories.base_repository import (
    AsyncSQLAlchemyRepository,
)
from taskmanager.application.ports.outbound.credential_store_port import ICredentialStore
from taskmanager.domain.exceptions import DuplicateEmailException
from taskmanager.domain.models.user import RefreshTokenRecord, Role, User, UserChanges


class SQLAlchemyCredentialStore(AsyncSQLAlchemyRepository, ICredentialStore):
    """Credential store backed by PostgreSQL through SQLAlchemy."""

    # ———— USERS ————

    async def get_user(self, user_id: UUID) -> Optional[User]:
        try:
            user = await self._get_model(UserModel, user_id)
            return user.to_domain() if user else None
        except SQLAlchemyError as e:
            raise await self._fail(f"Error fetching user {user_id}", e)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        try:
            result = await self.db.execute(select(UserModel).where(UserModel.email == email))
            user = result.unique().scalar_one_or_none()
            return user.to_domain() if user else None
        except SQLAlchemyError as e:
            raise await self._fail("Error fetching user by email", e)

    async def create_user(self, email: str, password_hash: str, role_id: int) -> User:
        try:
            user = UserModel(email=email, password=password_hash, role_id=role_id)
            self.db.add(user)
            await self.db.commit()
            return await self.get_user(user.id)
        except IntegrityError as e:
            await self.db.rollback()
            self.logger.warning(f"Duplicate email on insert: {email}")
            raise DuplicateEmailException() from e
        except SQLAlchemyError as e:
            raise await self._fail("Error creating user", e)

    async def update_user(self, user_id: UUID, changes: UserChanges) -> Optional[User]:
        try:
            user = await self._get_model(UserModel, user_id)
            if not user:
                return None

            if changes.has("email"):
                user.email = changes.email
            if changes.has("password"):
                user.password = changes.password
            if changes.has("role_id"):
                user.role_id = changes.role_id

            await self.db.commit()
            # role é joined; recarregar para refletir um novo role_id
            return await self.get_user(user_id)
        except IntegrityError as e:
            await self.db.rollback()
            raise DuplicateEmailException("Email already in use") from e
        except SQLAlchemyError as e:
            raise await self._fail(f"Error updating user {user_id}", e)

    async def delete_user(self, user_id: UUID) -> bool:
        try:
            result = await self.db.execute(delete(UserModel).where(UserModel.id == user_id))
            await self.db.commit()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            raise await self._fail(f"Error deleting user {user_id}", e)

    async def list_users(self) -> List[User]:
        try:
            result = await self.db.execute(select(UserModel).order_by(UserModel.email.asc()))
            return [user.to_domain() for user in result.unique().scalars().all()]
        except SQLAlchemyError as e:
            raise await self._fail("Error listing users", e)

    # ———— ROLES ————

    async def get_role(self, role_id: int) -> Optional[Role]:
        try:
            role = await self._get_model(RoleModel, role_id)
            return role.to_domain() if role else None
        except SQLAlchemyError as e:
            raise await self._fail(f"Error fetching role {role_id}", e)

    async def get_role_by_name(self, name: str) -> Optional[Role]:
        try:
            result = await self.db.execute(select(RoleModel).where(RoleModel.name == name))
            role = result.scalar_one_or_none()
            return role.to_domain() if role else None
        except SQLAlchemyError as e:
            raise await self._fail(f"Error fetching role {name}", e)

    async def create_role(self, name: str, role_id: Optional[int] = None) -> Role:
        try:
            role = RoleModel(id=role_id, name=name)
            self.db.add(role)
            await self.db.flush()
            if role_id is not None:
                # id explícito não avança a sequence do serial
                await self.db.execute(text(
                    "SELECT setval(pg_get_serial_sequence('roles', 'id'), (SELECT MAX(id) FROM roles))"
                ))
            await self.db.commit()
            return role.to_domain()
        except SQLAlchemyError as e:
            raise await self._fail(f"Error creating role {name}", e)

    async def list_roles(self) -> List[Role]:
        try:
            result = await self.db.execute(select(RoleModel).order_by(RoleModel.id.asc()))
            return [role.to_domain() for role in result.scalars().all()]
        except SQLAlchemyError as e:
            raise await self._fail("Error listing roles", e)

    # ———— REFRESH TOKENS ————

    async def create_refresh_token(self, record: RefreshTokenRecord) -> RefreshTokenRecord:
        try:
            token = RefreshTokenModel.from_domain(record)
            self.db.add(token)
            await self.db.commit()
            return token.to_domain()
        except SQLAlchemyError as e:
            raise await self._fail("Error storing refresh token", e)

    async def find_live_refresh_token(self, user_id: UUID, token_id: str) -> Optional[RefreshTokenRecord]:
        try:
            query = select(RefreshTokenModel).where(
                RefreshTokenModel.id == token_id,
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.revoked.is_(False),
            )
            result = await self.db.execute(query)
            token = result.scalar_one_or_none()
            return token.to_domain() if token else None
        except SQLAlchemyError as e:
            raise await self._fail("Error fetching refresh token", e)

    async def revoke_refresh_tokens(self, user_id: UUID, token_id: str) -> int:
        try:
            result = await self.db.execute(self._revoke_statement(user_id, token_id))
            await self.db.commit()
            return result.rowcount
        except SQLAlchemyError as e:
            raise await self._fail("Error revoking refresh token", e)

    async def rotate_refresh_token(self, user_id: UUID, old_token_id: str,
                                   new_record: RefreshTokenRecord) -> bool:
        try:
            # UPDATE ... WHERE revoked = false: só uma rotação concorrente vence
            result = await self.db.execute(self._revoke_statement(user_id, old_token_id))
            if result.rowcount != 1:
                await self.db.rollback()
                return False

            self.db.add(RefreshTokenModel.from_domain(new_record))
            await self.db.commit()
            return True
        except SQLAlchemyError as e:
            raise await self._fail("Error rotating refresh token", e)

    async def purge_refresh_tokens(self, now: datetime) -> int:
        try:
            result = await self.db.execute(
                delete(RefreshTokenModel).where(
                    or_(RefreshTokenModel.revoked.is_(True), RefreshTokenModel.expires_at <= now)
                )
            )
            await self.db.commit()
            return result.rowcount
        except SQLAlchemyError as e:
            raise await self._fail("Error purging refresh tokens", e)

    @staticmethod
    def _revoke_statement(user_id: UUID, token_id: str):
        return (
            update(RefreshTokenModel)
            .where(
                RefreshTokenModel.id == token_id,
                RefreshTokenModel.user_id == user_id,
                RefreshTokenModel.revoked.is_(False),
            )
            .values(revoked=True)
            .execution_options(synchronize_session=False)
        )
