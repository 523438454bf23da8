# taskmanager/test/routes/test_comment_routes.py

# Para rodar o arquivo
# pytest taskmanager/test/routes/test_comment_routes.py -v

from uuid import uuid4

import pytest_asyncio


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def other_token(async_client):
    user_data = {"email": f"usertest-{uuid4()}@example.com", "password": "TestPassword123!"}
    response = await async_client.post("/api/v1/auth/register", json=user_data)
    return response.json()["data"]["accessToken"]


@pytest_asyncio.fixture
async def task_id(async_client, user_token):
    response = await async_client.post(
        "/api/v1/tasks", json={"title": "Discuss", "priorityId": 1, "categoryId": 1}, headers=auth(user_token)
    )
    return response.json()["data"]["task"]["id"]


async def add_comment(client, token, task_id, content):
    response = await client.post(
        "/api/v1/comments", json={"content": content, "taskId": task_id}, headers=auth(token)
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["comment"]


async def test_create_and_list_comments(async_client, user_token, other_token, task_id):
    await add_comment(async_client, user_token, task_id, "first")
    second = await add_comment(async_client, other_token, task_id, "second")
    assert second["author"]["email"].startswith("usertest-")

    response = await async_client.get(f"/api/v1/comments/task/{task_id}", headers=auth(user_token))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["count"] == 2
    assert [c["content"] for c in data["comments"]] == ["second", "first"]


async def test_comment_on_missing_task(async_client, user_token):
    response = await async_client.post(
        "/api/v1/comments", json={"content": "hello", "taskId": str(uuid4())}, headers=auth(user_token)
    )
    assert response.status_code == 404


async def test_get_comment(async_client, user_token, task_id):
    comment = await add_comment(async_client, user_token, task_id, "read me")
    response = await async_client.get(f"/api/v1/comments/{comment['id']}", headers=auth(user_token))
    assert response.status_code == 200
    assert response.json()["data"]["comment"]["content"] == "read me"


async def test_only_author_updates(async_client, user_token, other_token, task_id):
    comment = await add_comment(async_client, other_token, task_id, "by other")

    response = await async_client.patch(
        f"/api/v1/comments/{comment['id']}", json={"content": "edited"}, headers=auth(user_token)
    )
    assert response.status_code == 403

    response = await async_client.patch(
        f"/api/v1/comments/{comment['id']}", json={"content": "edited"}, headers=auth(other_token)
    )
    assert response.status_code == 200
    assert response.json()["data"]["comment"]["content"] == "edited"


async def test_task_owner_deletes_comment_of_other(async_client, user_token, other_token, task_id):
    comment = await add_comment(async_client, other_token, task_id, "off topic")

    response = await async_client.delete(f"/api/v1/comments/{comment['id']}", headers=auth(user_token))

    assert response.status_code == 200
    response = await async_client.get(f"/api/v1/comments/{comment['id']}", headers=auth(user_token))
    assert response.status_code == 404


async def test_stranger_cannot_delete_comment(async_client, user_token, other_token, task_id):
    comment = await add_comment(async_client, user_token, task_id, "owner comment")
    response = await async_client.delete(f"/api/v1/comments/{comment['id']}", headers=auth(other_token))
    assert response.status_code == 403


async def test_empty_comment_is_rejected(async_client, user_token, task_id):
    response = await async_client.post(
        "/api/v1/comments", json={"content": "", "taskId": task_id}, headers=auth(user_token)
    )
    assert response.status_code == 422
