# taskmanager/shared/middleware/error_handler_middleware.py

from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from starlette.middleware.base import BaseHTTPMiddleware

from taskmanager.domain.exceptions import DomainException, ErrorKind
import logging

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, code: str, details=None, headers=None) -> JSONResponse:
    """Build the error envelope shared by every failure response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": message,
            "code": code,
            "details": jsonable_encoder(details),
        },
        headers=headers,
    )


def domain_error_response(exc: DomainException) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return error_response(exc.status_code, exc.message, exc.internal_code, exc.details, headers)


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Domain errors raised inside endpoints and dependencies."""
    if exc.status_code >= 500:
        logger.error(f"[{exc.internal_code}] {exc.message} on {request.url.path}")
    else:
        logger.warning(f"[{exc.internal_code}] DomainException: {exc.message}")
    return domain_error_response(exc)


# Campos do Pydantic que não voltam ao cliente: `input` ecoa o valor enviado
# (inclusive senhas) e `ctx` carrega objetos de exceção
HIDDEN_ERROR_FIELDS = ("input", "ctx", "url")


def sanitize_validation_errors(errors) -> list:
    return [
        {key: value for key, value in error.items() if key not in HIDDEN_ERROR_FIELDS}
        for error in errors
    ]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Erros de validação (Pydantic/FastAPI)."""
    logger.warning(f"RequestValidationError on {request.url.path}")
    return error_response(
        422,
        "Invalid request data.",
        ErrorKind.VALIDATION_ERROR.value,
        sanitize_validation_errors(exc.errors()),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence: anything that escaped the exception handlers is
    logged and masked as a generic 500.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)

        # 1. Exceções customizadas do domínio
        except DomainException as e:
            logger.warning(f"[{e.internal_code}] DomainException: {e.message}")
            return domain_error_response(e)

        # 2. Erros inesperados
        except Exception:
            logger.exception(f"Unexpected error on {request.url.path}")
            return error_response(
                500,
                "Internal server error.",
                ErrorKind.INTERNAL_SERVER_ERROR.value,
            )
