# taskmanager/adapters/configuration/config.py

"""
Settings for the task manager API.

Values come from the process environment and from the `.env` file at the
project root. Token lifetimes are kept as duration strings ("15m", "7d") and
exposed as timedeltas.
"""

from datetime import timedelta
from pathlib import Path
from dotenv import load_dotenv

# .env na raiz do projeto
env_path = Path(__file__).resolve().parents[3] / ".env"
load_dotenv(env_path)

from pydantic import SecretStr, Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings
from typing import Optional, List, Union
from logging import getLevelName

from taskmanager.shared.utils.datetime_utils import DateTimeUtil

# Fallbacks usados apenas fora de produção
INSECURE_ACCESS_SECRET = "access_secret"
INSECURE_REFRESH_SECRET = "refresh_secret"

SAMESITE_POLICIES = ("lax", "strict", "none")
TRUTHY = ("true", "1", "yes", "y", "on")


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=str(env_path),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Aplicação
    PROJECT_NAME: str = Field(default="Task Manager API")
    VERSION: str = Field(default="1.0.0")
    ENVIRONMENT: str = Field(default="development", description="development, production or testing")
    DEBUG: bool = Field(default=False)
    API_V1_STR: str = Field(default="/api/v1", description="Mount point of the v1 routers")
    LOG_LEVEL: str = Field(default="INFO", description="Root log level name")

    # Banco de dados
    DB_DRIVER: str = Field(default="asyncpg", description="SQLAlchemy async driver suffix")
    POSTGRES_USER: str = Field(default="postgres")
    POSTGRES_PASSWORD: str = Field(default="postgres")
    POSTGRES_DB: str = Field(default="taskmanager")
    POSTGRES_HOST: str = Field(default="localhost")
    POSTGRES_PORT: int = Field(default=5432)
    DATABASE_URL: Optional[str] = Field(default=None, description="Overrides the POSTGRES_* parts when set")
    DB_ECHO: bool = Field(default=False, description="Log every SQL statement")

    # Tokens
    JWT_ACCESS_SECRET: SecretStr = Field(default=SecretStr(INSECURE_ACCESS_SECRET),
                                         description="HMAC key for access tokens")
    JWT_REFRESH_SECRET: SecretStr = Field(default=SecretStr(INSECURE_REFRESH_SECRET),
                                          description="HMAC key for refresh tokens")
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_ACCESS_EXPIRES_IN: str = Field(default="15m", description="<n>[s|m|h|d]")
    JWT_REFRESH_EXPIRES_IN: str = Field(default="7d", description="<n>[s|m|h|d]")
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    # Cookie do refresh token
    REFRESH_COOKIE_NAME: str = Field(default="refreshToken")
    COOKIE_DOMAIN: Optional[str] = Field(default=None, description="Leave unset for a host-only cookie")
    COOKIE_PATH: str = Field(default="/")
    COOKIE_SAMESITE: str = Field(default="strict", description="lax, strict or none")

    # Papéis
    ADMIN_ROLE_ID: int = Field(default=1, description="Role id allowed into /admin")
    ADMIN_ROLE_NAME: str = Field(default="ADMIN")
    DEFAULT_ROLE_NAME: str = Field(default="USER")

    # Seed do administrador (opcional)
    SEED_ADMIN_EMAIL: Optional[str] = Field(default=None)
    SEED_ADMIN_PASSWORD: Optional[SecretStr] = Field(default=None)

    # Limpeza periódica de refresh tokens (0 desativa)
    REFRESH_TOKEN_PURGE_INTERVAL_MINUTES: int = Field(default=60, ge=0)

    CORS_ORIGINS: List[str] = Field(default=["http://localhost:3000", "http://127.0.0.1:3000"])

    def model_post_init(self, __context) -> None:
        if not self.DATABASE_URL:
            self.DATABASE_URL = (
                f"postgresql+{self.DB_DRIVER}://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
                f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
            )

        # Segredos padrão só servem para desenvolvimento e testes
        if self.is_production:
            defaults = {
                "JWT_ACCESS_SECRET": (self.JWT_ACCESS_SECRET, INSECURE_ACCESS_SECRET),
                "JWT_REFRESH_SECRET": (self.JWT_REFRESH_SECRET, INSECURE_REFRESH_SECRET),
            }
            for name, (secret, fallback) in defaults.items():
                if secret.get_secret_value() == fallback:
                    raise ValueError(f"{name} must be set in production")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def access_token_lifetime(self) -> timedelta:
        return DateTimeUtil.parse_duration(self.JWT_ACCESS_EXPIRES_IN)

    @property
    def refresh_token_lifetime(self) -> timedelta:
        return DateTimeUtil.parse_duration(self.JWT_REFRESH_EXPIRES_IN)

    @field_validator("DEBUG", "DB_ECHO", mode="before")
    def coerce_flag(cls, v: Union[str, bool, int]) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in TRUTHY
        return bool(v)

    @field_validator("CORS_ORIGINS", mode="before")
    def split_origins(cls, v: Union[str, List[str]]) -> List[str]:
        """Accepts a JSON list or a comma-separated string."""
        if isinstance(v, list):
            return v
        if isinstance(v, str) and not v.lstrip().startswith("["):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        raise ValueError(f"CORS_ORIGINS must be a list of origins, got {v!r}")

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str) -> str:
        level = str(v).upper()
        # getLevelName devolve "Level X" para nomes desconhecidos
        if not isinstance(getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    @field_validator("JWT_ACCESS_EXPIRES_IN", "JWT_REFRESH_EXPIRES_IN", mode="before")
    def validate_duration(cls, v: Union[str, int]) -> str:
        """Valida durações no formato <n>[s|m|h|d]."""
        DateTimeUtil.parse_duration(v)
        return str(v)

    @field_validator("COOKIE_SAMESITE", mode="before")
    def normalize_samesite(cls, v: str) -> str:
        policy = str(v).lower()
        if policy not in SAMESITE_POLICIES:
            raise ValueError(f"COOKIE_SAMESITE must be one of {', '.join(SAMESITE_POLICIES)}, got: {v}")
        return policy


settings = Settings()
