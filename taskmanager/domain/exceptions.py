# taskmanager/domain/exceptions.py

"""
Domain exceptions.

Every failure the application reports carries an ErrorKind. The HTTP layer
maps the kind to a status code by equality (see ERROR_STATUS), so message
texts can change freely without affecting the response code.
"""

from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    INVALID_ROLE = "INVALID_ROLE"
    INVALID_CATEGORY = "INVALID_CATEGORY"
    INVALID_PRIORITY = "INVALID_PRIORITY"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_REFRESH_TOKEN = "INVALID_REFRESH_TOKEN"
    REFRESH_TOKEN_EXPIRED = "REFRESH_TOKEN_EXPIRED"
    REFRESH_TOKEN_MISSING = "REFRESH_TOKEN_MISSING"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


ERROR_STATUS = {
    ErrorKind.DUPLICATE_EMAIL: 400,
    ErrorKind.INVALID_ROLE: 400,
    ErrorKind.INVALID_CATEGORY: 400,
    ErrorKind.INVALID_PRIORITY: 400,
    ErrorKind.INVALID_CREDENTIALS: 401,
    ErrorKind.INVALID_REFRESH_TOKEN: 401,
    ErrorKind.REFRESH_TOKEN_EXPIRED: 401,
    ErrorKind.REFRESH_TOKEN_MISSING: 401,
    ErrorKind.TOKEN_EXPIRED: 401,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_ERROR: 422,
    ErrorKind.DATABASE_ERROR: 500,
    ErrorKind.INTERNAL_SERVER_ERROR: 500,
}


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS[self.kind]

    @property
    def internal_code(self) -> str:
        return self.kind.value


class DuplicateEmailException(DomainException):
    kind = ErrorKind.DUPLICATE_EMAIL
    default_message = "User with this email already exists"


class InvalidRoleException(DomainException):
    kind = ErrorKind.INVALID_ROLE
    default_message = "Invalid role ID"


class InvalidCategoryException(DomainException):
    kind = ErrorKind.INVALID_CATEGORY
    default_message = "Invalid category ID"


class InvalidPriorityException(DomainException):
    kind = ErrorKind.INVALID_PRIORITY
    default_message = "Invalid priority ID"


class InvalidCredentialsException(DomainException):
    kind = ErrorKind.INVALID_CREDENTIALS
    default_message = "Invalid email or password"


class InvalidRefreshTokenException(DomainException):
    kind = ErrorKind.INVALID_REFRESH_TOKEN
    default_message = "Invalid refresh token"


class RefreshTokenExpiredException(DomainException):
    kind = ErrorKind.REFRESH_TOKEN_EXPIRED
    default_message = "Refresh token expired"


class RefreshTokenMissingException(DomainException):
    kind = ErrorKind.REFRESH_TOKEN_MISSING
    default_message = "Refresh token not found"


class AccessTokenExpiredException(DomainException):
    kind = ErrorKind.TOKEN_EXPIRED
    default_message = "Access token expired"


class UnauthenticatedException(DomainException):
    kind = ErrorKind.UNAUTHENTICATED
    default_message = "Authentication required. Please log in."


class PermissionDeniedException(DomainException):
    kind = ErrorKind.FORBIDDEN
    default_message = "Forbidden: You do not have permission to access this resource"


class ResourceNotFoundException(DomainException):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"

    def __init__(self, message: Optional[str] = None, resource_id: Any = None):
        super().__init__(message, details={"resource_id": str(resource_id)} if resource_id is not None else None)
        self.resource_id = resource_id


class DatabaseOperationException(DomainException):
    kind = ErrorKind.DATABASE_ERROR
    default_message = "Database operation failed"

    def __init__(self, message: Optional[str] = None, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error


# Erros do codec de tokens (não são erros HTTP por si só)

class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """The token signature is valid but its 'exp' has passed."""


class TokenInvalidError(TokenError):
    """The token is malformed, tampered, of the wrong type or missing claims."""
