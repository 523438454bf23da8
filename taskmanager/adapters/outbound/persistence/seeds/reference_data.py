# taskmanager/adapters/outbound/persistence/seeds/reference_data.py

"""
Script de seed para papéis, categorias, prioridades e usuário admin.

Idempotente: registros existentes (pelo nome/email) são mantidos.
Funciona com qualquer implementação dos stores, o que permite reutilizá-lo
nos testes com o store em memória.
"""

import asyncio
import logging

from taskmanager.adapters.configuration.config import Settings, settings as default_settings
from taskmanager.application.ports.outbound.credential_store_port import ICredentialStore
from taskmanager.application.ports.outbound.task_store_port import ITaskStore
from taskmanager.application.ports.outbound.token_service_port import IPasswordHasher
from taskmanager.shared.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)

# Categorias padrão
categories = ["Work", "Personal", "Education", "Health", "Finance", "Home", "Other"]

# Prioridades e seus níveis de ordenação
priorities = [
    {"name": "LOW", "level": 1},
    {"name": "MEDIUM", "level": 2},
    {"name": "HIGH", "level": 3},
    {"name": "URGENT", "level": 4},
]


async def seed_reference_data(
        credential_store: ICredentialStore,
        task_store: ITaskStore,
        hasher: IPasswordHasher,
        settings: Settings = default_settings,
) -> None:
    # Papéis: ADMIN recebe o id configurado como administrativo
    if not await credential_store.get_role_by_name(settings.ADMIN_ROLE_NAME):
        await credential_store.create_role(settings.ADMIN_ROLE_NAME, role_id=settings.ADMIN_ROLE_ID)
        logger.info(f"🟢 Role '{settings.ADMIN_ROLE_NAME}' created.")
    if not await credential_store.get_role_by_name(settings.DEFAULT_ROLE_NAME):
        await credential_store.create_role(settings.DEFAULT_ROLE_NAME)
        logger.info(f"🟢 Role '{settings.DEFAULT_ROLE_NAME}' created.")

    existing_categories = {c.name for c in await task_store.list_categories()}
    for name in categories:
        if name in existing_categories:
            logger.info(f"🟡 Category '{name}' already exists.")
            continue
        await task_store.create_category(name)
        logger.info(f"🟢 Category '{name}' created.")

    existing_priorities = {p.name for p in await task_store.list_priorities()}
    for priority in priorities:
        if priority["name"] in existing_priorities:
            logger.info(f"🟡 Priority '{priority['name']}' already exists.")
            continue
        await task_store.create_priority(priority["name"], priority["level"])
        logger.info(f"🟢 Priority '{priority['name']}' created.")

    if settings.SEED_ADMIN_EMAIL and settings.SEED_ADMIN_PASSWORD:
        if await credential_store.get_user_by_email(settings.SEED_ADMIN_EMAIL):
            logger.info(f"🟡 Admin '{settings.SEED_ADMIN_EMAIL}' already exists.")
        else:
            password_hash = await hasher.hash_password(settings.SEED_ADMIN_PASSWORD.get_secret_value())
            await credential_store.create_user(settings.SEED_ADMIN_EMAIL, password_hash, settings.ADMIN_ROLE_ID)
            logger.info(f"🟢 Admin '{settings.SEED_ADMIN_EMAIL}' created.")


async def run_reference_data_seed() -> None:
    from taskmanager.adapters.outbound.persistence.database import dispose_engine, get_session_factory
    from taskmanager.adapters.outbound.persistence.repositories.credential_repository import (
        SQLAlchemyCredentialStore,
    )
    from taskmanager.adapters.outbound.persistence.repositories.task_repository import SQLAlchemyTaskStore
    from taskmanager.adapters.outbound.security.password_hasher import BcryptPasswordHasher

    try:
        async with get_session_factory()() as session:
            await seed_reference_data(
                SQLAlchemyCredentialStore(session),
                SQLAlchemyTaskStore(session),
                BcryptPasswordHasher(rounds=default_settings.BCRYPT_ROUNDS),
            )
        logger.info("✅ Reference data seed finished.")
    except Exception as e:
        logger.error(f"🔴 Error running seed: {e}")
        raise
    finally:
        await dispose_engine()


if __name__ == "__main__":
    configure_logging(default_settings.LOG_LEVEL)
    asyncio.run(run_reference_data_seed())
