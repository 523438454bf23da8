# taskmanager/shared/utils/success_responses.py

# Exemplo de usuário retornado pelas rotas de autenticação
_session_user = {
    "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
    "email": "user@example.com",
    "role": "USER"
}

# Respostas de sucesso genéricas
common_success = {
    200: {
        "description": "Request processed successfully",
        "content": {
            "application/json": {
                "example": {"status": "success", "message": "Operation completed successfully."}
            }
        }
    }
}

# Sucessos para autenticação
auth_success = {
    201: {
        "description": "User registered; refresh token also set as httpOnly cookie",
        "content": {
            "application/json": {
                "example": {
                    "status": "success",
                    "message": "User registered successfully",
                    "data": {
                        "user": _session_user,
                        "accessToken": "<jwt>",
                        "refreshToken": "<jwt>"
                    }
                }
            }
        }
    },
    200: {
        "description": "Authenticated; refresh token set as httpOnly cookie",
        "content": {
            "application/json": {
                "example": {
                    "status": "success",
                    "message": "Login successful",
                    "data": {"user": _session_user, "accessToken": "<jwt>"}
                }
            }
        }
    }
}
