# taskmanager/application/ports/outbound/__init__.py

from .credential_store_port import ICredentialStore
from .task_store_port import ITaskStore
from .token_service_port import (
    AccessTokenClaims,
    IPasswordHasher,
    ITokenCodec,
    RefreshTokenClaims,
)

__all__ = [
    "ICredentialStore",
    "ITaskStore",
    "ITokenCodec",
    "IPasswordHasher",
    "AccessTokenClaims",
    "RefreshTokenClaims",
]
