# taskmanager/test/routes/test_protected_routes.py

# Para rodar o arquivo
# pytest taskmanager/test/routes/test_protected_routes.py -v

"""
Autenticação por bearer token e autorização por papel nas rotas protegidas.
"""

from datetime import timedelta
from uuid import uuid4

import pytest


async def test_user_route_with_valid_token(async_client, user_token, registered_user):
    user_data, _ = registered_user
    response = await async_client.get(
        "/api/v1/protected/user", headers={"Authorization": f"Bearer {user_token}"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "You have access to this protected route"
    assert body["data"]["user"]["email"] == user_data["email"]
    assert body["data"]["user"]["role"] == "USER"


async def test_user_route_without_token(async_client):
    response = await async_client.get("/api/v1/protected/user")
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHENTICATED"
    assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer ", "token-without-scheme"])
async def test_user_route_with_malformed_header(async_client, header):
    response = await async_client.get("/api/v1/protected/user", headers={"Authorization": header})
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHENTICATED"


async def test_user_route_with_invalid_token(async_client):
    response = await async_client.get(
        "/api/v1/protected/user", headers={"Authorization": "Bearer invalid.token.value"}
    )
    assert response.status_code == 401
    body = response.json()
    assert body["code"] == "UNAUTHENTICATED"
    assert body["error"] == "Invalid token. Please log in again."


async def test_user_route_with_expired_token(async_client, codec, registered_user):
    """Token expirado tem código próprio para o client saber que deve fazer refresh."""
    _, body = registered_user
    expired = codec.create_access_token(body["data"]["user"]["id"], expires_delta=timedelta(seconds=-5))

    response = await async_client.get("/api/v1/protected/user", headers={"Authorization": f"Bearer {expired}"})

    assert response.status_code == 401
    assert response.json()["code"] == "TOKEN_EXPIRED"


async def test_user_route_with_refresh_token_as_bearer(async_client, registered_user):
    _, body = registered_user
    response = await async_client.get(
        "/api/v1/protected/user", headers={"Authorization": f"Bearer {body['data']['refreshToken']}"}
    )
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHENTICATED"


async def test_token_of_deleted_user(async_client, codec):
    token = codec.create_access_token(uuid4())
    response = await async_client.get("/api/v1/protected/user", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["error"] == "User not found or token is invalid"


async def test_admin_route_forbidden_for_user(async_client, user_token):
    response = await async_client.get(
        "/api/v1/protected/admin", headers={"Authorization": f"Bearer {user_token}"}
    )
    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN"


async def test_admin_route_allowed_for_admin(async_client, admin_token):
    response = await async_client.get(
        "/api/v1/protected/admin", headers={"Authorization": f"Bearer {admin_token}"}
    )
    assert response.status_code == 200
    assert response.json()["data"]["user"]["role"] == "ADMIN"


async def test_admin_route_without_token_is_401_not_403(async_client):
    response = await async_client.get("/api/v1/protected/admin")
    assert response.status_code == 401


async def test_health(async_client):
    response = await async_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
