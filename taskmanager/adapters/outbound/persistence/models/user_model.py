# taskmanager/adapters/outbound/persistence/models/user_model.py

"""
Modelos de usuário, papel e refresh token.

Este módulo centraliza as tabelas ligadas à autenticação: usuários,
papéis (ADMIN, USER) e os registros de refresh tokens emitidos.
"""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from taskmanager.adapters.outbound.persistence.models.base_model import Base
from taskmanager.domain.models.user import (
    RefreshTokenRecord,
    Role,
    User,
    UserSummary,
)
from taskmanager.shared.utils.datetime_utils import DateTimeUtil


class RoleModel(Base):
    """
    Papel de acesso.

    Attributes:
        id: Identificador inteiro (1 = ADMIN por convenção)
        name: Nome único do papel
    """
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), unique=True, nullable=False)

    def to_domain(self) -> Role:
        return Role(id=self.id, name=self.name)


class UserModel(Base):
    """
    Modelo de usuário do sistema.

    Attributes:
        id: Identificador único do usuário (UUID)
        email: Email do usuário (utilizado para login)
        password: Hash bcrypt da senha do usuário
        role_id: Papel do usuário
        created_at: Data e hora de criação
        updated_at: Data e hora da última atualização
    """
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # Papel sempre carregado junto com o usuário
    role = relationship("RoleModel", lazy="joined")

    refresh_tokens = relationship(
        "RefreshTokenModel",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="noload",
    )

    def to_domain(self) -> User:
        return User(
            id=self.id,
            email=self.email,
            password_hash=self.password,
            role_id=self.role_id,
            role=self.role.to_domain() if self.role else None,
            created_at=DateTimeUtil.ensure_utc(self.created_at),
            updated_at=DateTimeUtil.ensure_utc(self.updated_at),
        )

    def to_summary(self) -> UserSummary:
        return UserSummary(id=self.id, email=self.email)


class RefreshTokenModel(Base):
    """
    Registro de refresh token emitido.

    Attributes:
        id: Mesmo valor do claim `jti` do token
        user_id: Dono do token
        expires_at: Expiração persistida (checada independentemente do JWT)
        revoked: Só muda de False para True
    """
    __tablename__ = "refresh_tokens"

    id = Column(String(64), primary_key=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    revoked = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    user = relationship("UserModel", back_populates="refresh_tokens", lazy="noload")

    def to_domain(self) -> RefreshTokenRecord:
        return RefreshTokenRecord(
            id=self.id,
            user_id=self.user_id,
            expires_at=DateTimeUtil.ensure_utc(self.expires_at),
            revoked=bool(self.revoked),
            created_at=DateTimeUtil.ensure_utc(self.created_at),
        )

    @classmethod
    def from_domain(cls, record: RefreshTokenRecord) -> "RefreshTokenModel":
        return cls(
            id=record.id,
            user_id=record.user_id,
            expires_at=record.expires_at,
            revoked=record.revoked,
            created_at=record.created_at,
        )
