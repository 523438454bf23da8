# taskmanager/main.py

"""
Application factory.

Builds the FastAPI app, wires the security components into `app.state`,
registers middleware and exception handlers and, unless disabled, starts a
background task that purges revoked/expired refresh tokens.
"""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi_pagination import add_pagination

from taskmanager.adapters.configuration.config import Settings, settings
from taskmanager.adapters.inbound.api.v1.router import api_router
from taskmanager.adapters.outbound.persistence.database import dispose_engine, get_session_factory
from taskmanager.adapters.outbound.persistence.repositories.credential_repository import (
    SQLAlchemyCredentialStore,
)
from taskmanager.adapters.outbound.security.jwt_cookies import RefreshCookieManager
from taskmanager.adapters.outbound.security.password_hasher import BcryptPasswordHasher
from taskmanager.adapters.outbound.security.token_codec import JWTTokenCodec
from taskmanager.application.use_cases.auth_use_cases import AsyncAuthService
from taskmanager.domain.exceptions import DomainException
from taskmanager.shared.middleware import (
    AsyncRequestLoggingMiddleware,
    ErrorHandlerMiddleware,
    domain_exception_handler,
    validation_exception_handler,
)
from taskmanager.shared.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


async def purge_refresh_tokens_once(app: FastAPI) -> int:
    """Run a single purge against the database."""
    session_factory = get_session_factory()
    async with session_factory() as session:
        service = AsyncAuthService(
            SQLAlchemyCredentialStore(session),
            app.state.token_codec,
            app.state.password_hasher,
        )
        return await service.purge_stale_refresh_tokens()


async def run_refresh_token_purge(app: FastAPI, interval_seconds: int) -> None:
    """Background loop that deletes revoked and expired refresh tokens."""
    try:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                removed = await purge_refresh_tokens_once(app)
                logger.info(f"🧹 Refresh token purge removed {removed} rows")
            except asyncio.CancelledError:
                raise
            except Exception as e:
                # Falha pontual não deve derrubar o loop
                logger.error(f"Refresh token purge failed: {e}")
    except asyncio.CancelledError:
        logger.info("Refresh token purge task cancelled")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings: Settings = app.state.settings
    purge_task = None

    interval_minutes = app_settings.REFRESH_TOKEN_PURGE_INTERVAL_MINUTES
    if interval_minutes > 0:
        purge_task = asyncio.create_task(run_refresh_token_purge(app, interval_minutes * 60))
        logger.info(f"Refresh token purge scheduled every {interval_minutes} minutes")

    yield

    if purge_task:
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
    await dispose_engine()


def create_app(app_settings: Settings = settings) -> FastAPI:
    configure_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        version=app_settings.VERSION,
        debug=app_settings.DEBUG,
        lifespan=lifespan,
    )

    # Componentes de segurança compartilhados pelas dependências
    app.state.settings = app_settings
    app.state.token_codec = JWTTokenCodec.from_settings(app_settings)
    app.state.password_hasher = BcryptPasswordHasher(app_settings.BCRYPT_ROUNDS)
    app.state.cookie_manager = RefreshCookieManager(app_settings)

    # A ordem importa: o último adicionado é o mais externo
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(AsyncRequestLoggingMiddleware, production=app_settings.is_production)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(api_router, prefix=app_settings.API_V1_STR)

    @app.get("/health", tags=["Health"], summary="Liveness probe")
    async def health():
        return {"status": "ok", "version": app_settings.VERSION}

    add_pagination(app)
    return app


app = create_app()
