# taskmanager/adapters/outbound/security/password_hasher.py

import asyncio
import logging

import bcrypt

from taskmanager.application.ports.outbound.token_service_port import IPasswordHasher

logger = logging.getLogger(__name__)

# bcrypt ignora (ou rejeita) bytes além deste limite
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher(IPasswordHasher):
    """
    Password hashing with bcrypt.

    Hashing runs in a worker thread so the event loop is not blocked for the
    duration of the key stretching.
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        # Gerado uma vez: toda falha de login custa uma única verificação
        self._dummy_hash = self.hash_password_sync("dummy-password")

    def hash_password_sync(self, password: str) -> str:
        """Synchronously hash a password (seeds and scripts)."""
        password_bytes = self._encode(password)
        hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    async def hash_password(self, password: str) -> str:
        """Asynchronously hash a password."""
        return await asyncio.to_thread(self.hash_password_sync, password)

    async def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a plain password against a hashed password."""
        try:
            password_bytes = self._encode(plain_password)
        except ValueError:
            return False
        try:
            return await asyncio.to_thread(
                bcrypt.checkpw, password_bytes, hashed_password.encode("utf-8")
            )
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    async def burn_verification(self, plain_password: str) -> None:
        """
        Spend one verification on a throwaway hash.

        Used when the account does not exist, so both login failure paths
        cost the same.
        """
        await self.verify_password(plain_password, self._dummy_hash)

    @staticmethod
    def _encode(password: str) -> bytes:
        password_bytes = password.encode("utf-8")
        if len(password_bytes) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
        return password_bytes
