# taskmanager/test/unit/test_config.py

# Para rodar o arquivo
# pytest taskmanager/test/unit/test_config.py -v

from datetime import timedelta

import pytest
from pydantic import ValidationError

from taskmanager.adapters.configuration.config import Settings


def test_defaults_build_database_url_and_lifetimes():
    settings = Settings(POSTGRES_USER="u", POSTGRES_PASSWORD="p", POSTGRES_HOST="db",
                        POSTGRES_PORT=5433, POSTGRES_DB="tasks", DATABASE_URL=None)
    assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@db:5433/tasks"
    assert settings.access_token_lifetime == timedelta(minutes=15)
    assert settings.refresh_token_lifetime == timedelta(days=7)


def test_custom_lifetimes():
    settings = Settings(JWT_ACCESS_EXPIRES_IN="5m", JWT_REFRESH_EXPIRES_IN="1d")
    assert settings.access_token_lifetime == timedelta(minutes=5)
    assert settings.refresh_token_lifetime == timedelta(days=1)


def test_invalid_duration_is_rejected():
    with pytest.raises(ValidationError):
        Settings(JWT_ACCESS_EXPIRES_IN="soon")


def test_production_requires_real_secrets():
    """Em produção os segredos padrão não são aceitos."""
    with pytest.raises(ValueError):
        Settings(ENVIRONMENT="production")


def test_production_with_secrets():
    settings = Settings(ENVIRONMENT="production", JWT_ACCESS_SECRET="a" * 32, JWT_REFRESH_SECRET="b" * 32)
    assert settings.is_production is True


def test_cors_origins_from_comma_separated_string():
    settings = Settings(CORS_ORIGINS="http://a.example.com, http://b.example.com")
    assert settings.CORS_ORIGINS == ["http://a.example.com", "http://b.example.com"]


def test_cookie_samesite_is_validated():
    assert Settings(COOKIE_SAMESITE="Lax").COOKIE_SAMESITE == "lax"
    with pytest.raises(ValidationError):
        Settings(COOKIE_SAMESITE="sometimes")


def test_log_level_is_validated():
    assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(LOG_LEVEL="chatty")


def test_purge_interval_cannot_be_negative():
    with pytest.raises(ValidationError):
        Settings(REFRESH_TOKEN_PURGE_INTERVAL_MINUTES=-1)
