# taskmanager/shared/middleware/logging_middleware.py

"""
Middleware for HTTP request logging.

One line per request and one per response. Headers, cookies and bodies are
never logged, so access tokens, refresh cookies and passwords stay out of
the logs.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

# Configure logger
logger = logging.getLogger(__name__)


def _user_label(request: Request) -> str:
    # get_current_user deixa o usuário autenticado em request.state
    user = getattr(request.state, "user", None)
    return str(user.id) if user is not None else "anonymous"


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware para log de requisições HTTP.

    Outside production the query string and client address are included.
    """

    def __init__(self, app, production: bool = False):
        super().__init__(app)
        self.production = production

    async def dispatch(self, request: Request, call_next):
        route = f"{request.method} {request.url.path}"

        if self.production:
            logger.info(f"Request: {route}")
        else:
            query_params = dict(request.query_params)
            client = request.client.host if request.client else "N/A"
            logger.info(f"Request: {route} | Query: {query_params or 'N/A'} | Client: {client}")

        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        # 4xx e 5xx sobem de nível para facilitar o filtro
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        message = f"Response: {response.status_code} for {route} | User: {_user_label(request)}"
        if not self.production:
            message += f" | Time: {elapsed:.4f}s"
        logger.log(level, message)

        return response
