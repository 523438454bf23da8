# taskmanager/domain/models/user.py

"""
Modelos de domínio para usuários, papéis e registros de refresh token.

Entidades puras, sem dependências de frameworks de persistência.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class Role:
    """Representação de domínio para um papel (ADMIN, USER)."""
    id: Optional[int]
    name: str


@dataclass
class User:
    """
    Usuário do sistema.

    `password_hash` nunca deve ser serializado para fora da aplicação;
    use `sanitized()` antes de devolver o usuário a um chamador.
    """
    id: Optional[UUID]
    email: str
    password_hash: Optional[str]
    role_id: int
    role: Optional[Role] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def role_name(self) -> Optional[str]:
        return self.role.name if self.role else None

    def sanitized(self) -> "User":
        """Return a copy of the user without the password hash."""
        return User(
            id=self.id,
            email=self.email,
            password_hash=None,
            role_id=self.role_id,
            role=self.role,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


@dataclass
class UserSummary:
    """Visão reduzida de um usuário (autor de comentário, dono de tarefa)."""
    id: UUID
    email: str


@dataclass
class UserChanges:
    """
    Alterações parciais de um usuário.

    Somente os campos presentes em `fields_set` são aplicados, de modo que
    "não informado" e "informado como None" não se confundem.
    """
    email: Optional[str] = None
    password: Optional[str] = None
    role_id: Optional[int] = None
    fields_set: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_mapping(cls, data: dict) -> "UserChanges":
        allowed = {k: v for k, v in data.items() if k in ("email", "password", "role_id")}
        return cls(**allowed, fields_set=frozenset(allowed))

    def has(self, name: str) -> bool:
        return name in self.fields_set


@dataclass
class RefreshTokenRecord:
    """
    Registro persistido de um refresh token emitido.

    O `id` é o mesmo valor do claim `jti` dentro do token assinado.
    Um registro só é utilizável enquanto não revogado e não expirado;
    `revoked` só muda de False para True.
    """
    id: str
    user_id: UUID
    expires_at: datetime
    revoked: bool = False
    created_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass
class TokenPair:
    access_token: str
    refresh_token: str


@dataclass
class AuthResult:
    """Resultado de register/login/refresh: usuário sem hash + par de tokens."""
    user: User
    access_token: str
    refresh_token: str
