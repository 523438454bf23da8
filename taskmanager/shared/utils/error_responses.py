# taskmanager/shared/utils/error_responses.py

# Exemplos de erro para a documentação OpenAPI (envelope do ErrorHandlerMiddleware)


def _error(message: str, code: str) -> dict:
    return {"success": False, "error": message, "code": code, "details": None}


# Respostas de erro genéricas
common_errors = {
    422: {
        "description": "Validation error",
        "content": {
            "application/json": {
                "example": _error("Invalid request data.", "VALIDATION_ERROR")
            }
        }
    },
    500: {
        "description": "Internal server error",
        "content": {
            "application/json": {
                "example": _error("Internal server error.", "INTERNAL_SERVER_ERROR")
            }
        }
    }
}

unauthorized_error = {
    401: {
        "description": "Unauthorized (missing, invalid or expired token)",
        "content": {
            "application/json": {
                "examples": {
                    "missing_token": {
                        "summary": "Missing token",
                        "value": _error("Authentication required. Please log in.", "UNAUTHENTICATED")
                    },
                    "expired_token": {
                        "summary": "Expired access token",
                        "value": _error("Access token expired", "TOKEN_EXPIRED")
                    },
                    "invalid_token": {
                        "summary": "Invalid token",
                        "value": _error("Invalid token. Please log in again.", "UNAUTHENTICATED")
                    }
                }
            }
        }
    }
}

forbidden_error = {
    403: {
        "description": "Forbidden",
        "content": {
            "application/json": {
                "example": _error("Access denied: Admin privileges required", "FORBIDDEN")
            }
        }
    }
}

not_found_error = {
    404: {
        "description": "Not found",
        "content": {
            "application/json": {
                "example": _error("Task not found", "NOT_FOUND")
            }
        }
    }
}

# Erros para autenticação e registro de usuário
auth_errors = {
    400: {
        "description": "Bad Request (duplicate email, invalid role)",
        "content": {
            "application/json": {
                "examples": {
                    "duplicate_email": {
                        "summary": "Duplicate email",
                        "value": _error("User with this email already exists", "DUPLICATE_EMAIL")
                    },
                    "invalid_role": {
                        "summary": "Invalid role",
                        "value": _error("Invalid role ID", "INVALID_ROLE")
                    }
                }
            }
        }
    },
    401: {
        "description": "Unauthorized (invalid credentials or refresh token)",
        "content": {
            "application/json": {
                "examples": {
                    "invalid_credentials": {
                        "summary": "Invalid Credentials",
                        "value": _error("Invalid email or password", "INVALID_CREDENTIALS")
                    },
                    "invalid_refresh_token": {
                        "summary": "Invalid refresh token",
                        "value": _error("Invalid refresh token", "INVALID_REFRESH_TOKEN")
                    },
                    "expired_refresh_token": {
                        "summary": "Expired refresh token",
                        "value": _error("Refresh token expired", "REFRESH_TOKEN_EXPIRED")
                    },
                    "missing_refresh_token": {
                        "summary": "Missing refresh cookie",
                        "value": _error("Refresh token not found", "REFRESH_TOKEN_MISSING")
                    }
                }
            }
        }
    },
    **common_errors
}

# Erros para tarefas e comentários
resource_errors = {
    400: {
        "description": "Bad Request (invalid category or priority)",
        "content": {
            "application/json": {
                "example": _error("Invalid category ID", "INVALID_CATEGORY")
            }
        }
    },
    **unauthorized_error,
    403: {
        "description": "Forbidden (not the owner)",
        "content": {
            "application/json": {
                "example": _error("You do not have permission to update this task", "FORBIDDEN")
            }
        }
    },
    **not_found_error,
    **common_errors
}

# Erros para as rotas administrativas
admin_errors = {
    400: auth_errors[400],
    **unauthorized_error,
    **forbidden_error,
    404: {
        "description": "Not found",
        "content": {
            "application/json": {
                "example": _error("User not found", "NOT_FOUND")
            }
        }
    },
    **common_errors
}
