# taskmanager/shared/middleware/__init__.py

from .error_handler_middleware import (
    ErrorHandlerMiddleware,
    domain_exception_handler,
    validation_exception_handler,
)
from .logging_middleware import AsyncRequestLoggingMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "AsyncRequestLoggingMiddleware",
    "domain_exception_handler",
    "validation_exception_handler",
]
