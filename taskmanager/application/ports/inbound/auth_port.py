# taskmanager/application/ports/inbound/auth_port.py

from abc import ABC, abstractmethod
from typing import Optional

from taskmanager.domain.models.user import AuthResult


class IAuthUseCase(ABC):
    """Interface for session lifecycle use cases."""

    @abstractmethod
    async def register(self, email: str, password: str, role_id: int) -> AuthResult:
        pass

    @abstractmethod
    async def login(self, email: str, password: str) -> AuthResult:
        pass

    @abstractmethod
    async def refresh(self, refresh_token: str) -> AuthResult:
        pass

    @abstractmethod
    async def logout(self, refresh_token: Optional[str]) -> bool:
        pass
