# taskmanager/adapters/outbound/security/jwt_cookies.py

"""
Gerenciador do cookie HTTP que transporta o refresh token.

O refresh token nunca é lido por JavaScript: o cookie é httpOnly,
SameSite estrito e `secure` em produção.
"""

import logging
from typing import Optional

from fastapi import Request, Response

from taskmanager.adapters.configuration.config import Settings

# Configurar logger
logger = logging.getLogger(__name__)


class RefreshCookieManager:
    """Set, read and clear the refresh token cookie."""

    def __init__(self, settings: Settings):
        self.cookie_name = settings.REFRESH_COOKIE_NAME
        self.cookie_domain = settings.COOKIE_DOMAIN
        self.cookie_path = settings.COOKIE_PATH
        self.cookie_samesite = settings.COOKIE_SAMESITE
        self.cookie_secure = settings.is_production
        self.cookie_max_age = int(settings.refresh_token_lifetime.total_seconds())

    def set_refresh_token_cookie(self, response: Response, refresh_token: str) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=refresh_token,
            max_age=self.cookie_max_age,
            path=self.cookie_path,
            domain=self.cookie_domain,
            secure=self.cookie_secure,
            httponly=True,
            samesite=self.cookie_samesite,
        )
        logger.debug("Refresh token cookie set")

    def get_refresh_token(self, request: Request) -> Optional[str]:
        return request.cookies.get(self.cookie_name) or None

    def clear_refresh_token_cookie(self, response: Response) -> None:
        response.delete_cookie(
            key=self.cookie_name,
            path=self.cookie_path,
            domain=self.cookie_domain,
            secure=self.cookie_secure,
            httponly=True,
            samesite=self.cookie_samesite,
        )
