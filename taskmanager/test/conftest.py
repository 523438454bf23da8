# taskmanager/test/conftest.py

"""
Fixtures compartilhadas.

A API roda contra os stores em memória (sem PostgreSQL): as dependências
get_credential_store/get_task_store são sobrescritas para apontar para um
InMemoryDatabase novo a cada teste, já populado pelo seed de referência.
"""

from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from taskmanager.adapters.configuration.config import Settings
from taskmanager.adapters.inbound.api.deps import get_credential_store, get_task_store
from taskmanager.adapters.outbound.persistence.repositories.memory_repository import (
    InMemoryCredentialStore,
    InMemoryDatabase,
    InMemoryTaskStore,
)
from taskmanager.adapters.outbound.persistence.seeds.reference_data import seed_reference_data
from taskmanager.adapters.outbound.security.password_hasher import BcryptPasswordHasher
from taskmanager.adapters.outbound.security.token_codec import JWTTokenCodec
from taskmanager.application.use_cases.auth_use_cases import AsyncAuthService
from taskmanager.main import create_app

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "AdminPassword123!"
USER_PASSWORD = "TestPassword123!"


@pytest.fixture
def test_settings() -> Settings:
    """Configuração de teste: bcrypt barato e limpeza periódica desligada."""
    return Settings(
        ENVIRONMENT="testing",
        LOG_LEVEL="WARNING",
        BCRYPT_ROUNDS=4,
        REFRESH_TOKEN_PURGE_INTERVAL_MINUTES=0,
        JWT_ACCESS_SECRET="test-access-secret",
        JWT_REFRESH_SECRET="test-refresh-secret",
        SEED_ADMIN_EMAIL=ADMIN_EMAIL,
        SEED_ADMIN_PASSWORD=ADMIN_PASSWORD,
    )


@pytest.fixture
def hasher(test_settings) -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=test_settings.BCRYPT_ROUNDS)


@pytest.fixture
def codec(test_settings) -> JWTTokenCodec:
    return JWTTokenCodec.from_settings(test_settings)


@pytest_asyncio.fixture
async def memory_db(test_settings, hasher) -> InMemoryDatabase:
    """Banco em memória com papéis, categorias, prioridades e admin."""
    database = InMemoryDatabase()
    await seed_reference_data(
        InMemoryCredentialStore(database),
        InMemoryTaskStore(database),
        hasher,
        test_settings,
    )
    return database


@pytest.fixture
def credential_store(memory_db) -> InMemoryCredentialStore:
    return InMemoryCredentialStore(memory_db)


@pytest.fixture
def task_store(memory_db) -> InMemoryTaskStore:
    return InMemoryTaskStore(memory_db)


@pytest.fixture
def auth_service(credential_store, codec, hasher) -> AsyncAuthService:
    return AsyncAuthService(credential_store, codec, hasher)


@pytest.fixture
def app(test_settings, memory_db):
    application = create_app(test_settings)
    application.dependency_overrides[get_credential_store] = lambda: InMemoryCredentialStore(memory_db)
    application.dependency_overrides[get_task_store] = lambda: InMemoryTaskStore(memory_db)
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def registered_user(async_client):
    """
    Registra um usuário pela API e retorna (credenciais, corpo da resposta).
    """
    user_data = {
        "email": f"usertest-{uuid4()}@example.com",
        "password": USER_PASSWORD,
    }
    response = await async_client.post("/api/v1/auth/register", json=user_data)
    assert response.status_code == 201, f"Erro ao registrar usuário: {response.text}"
    return user_data, response.json()


@pytest_asyncio.fixture
async def user_token(registered_user) -> str:
    """Access token do usuário comum registrado."""
    _, body = registered_user
    return body["data"]["accessToken"]


@pytest_asyncio.fixture
async def admin_token(auth_service) -> str:
    """Access token do admin criado pelo seed."""
    result = await auth_service.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    return result.access_token
