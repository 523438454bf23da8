# taskmanager/test/routes/test_admin_routes.py

# Para rodar o arquivo
# pytest taskmanager/test/routes/test_admin_routes.py -v

"""
Gestão de usuários pelo administrador.
"""

from uuid import uuid4

ADMIN_ROLE_ID, USER_ROLE_ID = 1, 2


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def test_admin_routes_forbidden_for_user(async_client, user_token):
    response = await async_client.get("/api/v1/admin/users", headers=auth(user_token))
    assert response.status_code == 403
    assert response.json()["error"] == "Access denied: Admin privileges required"


async def test_admin_routes_require_authentication(async_client):
    response = await async_client.get("/api/v1/admin/users")
    assert response.status_code == 401


async def test_list_users_paginated(async_client, admin_token, registered_user):
    response = await async_client.get("/api/v1/admin/users", params={"page": 1, "size": 1},
                                      headers=auth(admin_token))

    assert response.status_code == 200
    page = response.json()
    assert page["total"] == 2
    assert len(page["items"]) == 1
    assert "password" not in page["items"][0]
    assert "passwordHash" not in page["items"][0]


async def test_create_update_and_delete_user(async_client, admin_token):
    email = f"usertest-{uuid4()}@example.com"

    # Criar
    response = await async_client.post(
        "/api/v1/admin/users",
        json={"email": email, "password": "TestPassword123!", "roleId": USER_ROLE_ID},
        headers=auth(admin_token),
    )
    assert response.status_code == 201, response.text
    user = response.json()["data"]["user"]
    assert user["role"]["name"] == "USER"

    # Promover a admin
    response = await async_client.patch(
        f"/api/v1/admin/users/{user['id']}", json={"roleId": ADMIN_ROLE_ID}, headers=auth(admin_token)
    )
    assert response.status_code == 200
    updated = response.json()["data"]["user"]
    assert updated["roleId"] == ADMIN_ROLE_ID
    assert updated["role"]["name"] == "ADMIN"
    assert updated["email"] == email

    # Trocar a senha: o login passa a usar a nova
    response = await async_client.patch(
        f"/api/v1/admin/users/{user['id']}", json={"password": "NewPassword456!"}, headers=auth(admin_token)
    )
    assert response.status_code == 200
    response = await async_client.post("/api/v1/auth/login", json={"email": email, "password": "NewPassword456!"})
    assert response.status_code == 200

    # Remover
    response = await async_client.delete(f"/api/v1/admin/users/{user['id']}", headers=auth(admin_token))
    assert response.status_code == 200
    response = await async_client.get(f"/api/v1/admin/users/{user['id']}", headers=auth(admin_token))
    assert response.status_code == 404


async def test_create_user_duplicate_email(async_client, admin_token, registered_user):
    user_data, _ = registered_user
    response = await async_client.post(
        "/api/v1/admin/users",
        json={**user_data, "roleId": USER_ROLE_ID},
        headers=auth(admin_token),
    )
    assert response.status_code == 400
    assert response.json()["code"] == "DUPLICATE_EMAIL"


async def test_update_user_with_invalid_role(async_client, admin_token, registered_user):
    _, body = registered_user
    user_id = body["data"]["user"]["id"]
    response = await async_client.patch(
        f"/api/v1/admin/users/{user_id}", json={"roleId": 999}, headers=auth(admin_token)
    )
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_ROLE"


async def test_update_user_email_in_use(async_client, admin_token, registered_user):
    _, body = registered_user
    response = await async_client.patch(
        f"/api/v1/admin/users/{body['data']['user']['id']}",
        json={"email": "admin@example.com"},
        headers=auth(admin_token),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Email already in use"


async def test_deleted_user_token_stops_working(async_client, admin_token, registered_user, user_token):
    _, body = registered_user
    response = await async_client.delete(
        f"/api/v1/admin/users/{body['data']['user']['id']}", headers=auth(admin_token)
    )
    assert response.status_code == 200

    response = await async_client.get("/api/v1/auth/me", headers=auth(user_token))
    assert response.status_code == 401


async def test_list_roles(async_client, admin_token):
    response = await async_client.get("/api/v1/admin/roles", headers=auth(admin_token))
    assert response.status_code == 200
    roles = response.json()["data"]["roles"]
    assert [(r["id"], r["name"]) for r in roles] == [(ADMIN_ROLE_ID, "ADMIN"), (USER_ROLE_ID, "USER")]


async def test_get_unknown_user(async_client, admin_token):
    response = await async_client.get(f"/api/v1/admin/users/{uuid4()}", headers=auth(admin_token))
    assert response.status_code == 404
