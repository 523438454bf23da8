# taskmanager/test/routes/test_auth_login_errors.py

# Para rodar o arquivo
# pytest taskmanager/test/routes/test_auth_login_errors.py -v

"""
Testes de autenticação: login com credenciais inválidas.

Este módulo testa se a API responde corretamente (401 Unauthorized)
ao tentar autenticar com email e/ou senha inválidos, sem revelar qual
dos dois estava errado.
"""


async def test_login_with_nonexistent_user(async_client):
    """
    Testa login com credenciais válidas em formato mas usuário inexistente.
    Deve retornar 401 e a mensagem 'Invalid email or password'.
    """
    invalid_login_data = {
        "email": "userdoesnotexist@example.com",
        "password": "ValidP@ssword123"
    }

    response = await async_client.post("/api/v1/auth/login", json=invalid_login_data)

    assert response.status_code == 401, f"Deveria retornar 401, retornou {response.status_code}."
    response_json = response.json()
    assert response_json["success"] is False
    assert response_json["code"] == "INVALID_CREDENTIALS"
    assert response_json["error"] == "Invalid email or password"


async def test_login_with_wrong_password(async_client, registered_user):
    """
    Testa login de usuário existente com senha errada.
    A resposta deve ser idêntica à de usuário inexistente.
    """
    user_data, _ = registered_user

    response = await async_client.post(
        "/api/v1/auth/login",
        json={"email": user_data["email"], "password": "WrongPassword123"},
    )
    unknown = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "someone-else@example.com", "password": "WrongPassword123"},
    )

    assert response.status_code == unknown.status_code == 401
    assert response.json() == unknown.json()


async def test_login_failure_does_not_set_cookie(async_client):
    response = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "nobody@example.com", "password": "whatever1"},
    )
    assert response.status_code == 401
    assert "set-cookie" not in response.headers


async def test_login_with_invalid_email_format(async_client):
    """E-mail mal formado é erro de validação (422), não de credenciais."""
    response = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "not-an-email", "password": "ValidP@ssword123"},
    )
    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["error"] == "Invalid request data."
    assert isinstance(body["details"], list)


async def test_login_with_missing_password(async_client):
    response = await async_client.post("/api/v1/auth/login", json={"email": "user@example.com"})
    assert response.status_code == 422
