# taskmanager/test/routes/test_task_routes.py

# Para rodar o arquivo
# pytest taskmanager/test/routes/test_task_routes.py -v

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest_asyncio

# Ids criados pelo seed de referência
WORK = 1
LOW, MEDIUM, HIGH, URGENT = 1, 2, 3, 4


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def other_token(async_client):
    """Access token de um segundo usuário."""
    user_data = {"email": f"usertest-{uuid4()}@example.com", "password": "TestPassword123!"}
    response = await async_client.post("/api/v1/auth/register", json=user_data)
    return response.json()["data"]["accessToken"]


async def create_task(client, token, **fields):
    payload = {"title": "Task", "priorityId": MEDIUM, "categoryId": WORK}
    payload.update(fields)
    response = await client.post("/api/v1/tasks", json=payload, headers=auth(token))
    assert response.status_code == 201, response.text
    return response.json()["data"]["task"]


async def test_create_task(async_client, user_token):
    due = (datetime.now(timezone.utc) + timedelta(days=2)).isoformat()
    task = await create_task(async_client, user_token, title="Write report", description="Q3",
                             priorityId=HIGH, dueDate=due)

    assert task["title"] == "Write report"
    assert task["status"] == "PENDING"
    assert task["priority"]["name"] == "HIGH"
    assert task["category"]["name"] == "Work"
    assert task["createdBy"]["email"].startswith("usertest-")
    assert task["dueDate"] is not None


async def test_create_task_requires_authentication(async_client):
    response = await async_client.post("/api/v1/tasks", json={"title": "x", "priorityId": LOW, "categoryId": WORK})
    assert response.status_code == 401


async def test_create_task_with_invalid_category(async_client, user_token):
    response = await async_client.post(
        "/api/v1/tasks", json={"title": "x", "priorityId": LOW, "categoryId": 999}, headers=auth(user_token)
    )
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_CATEGORY"


async def test_create_task_with_blank_title(async_client, user_token):
    response = await async_client.post(
        "/api/v1/tasks", json={"title": "   ", "priorityId": LOW, "categoryId": WORK}, headers=auth(user_token)
    )
    assert response.status_code == 422


async def test_list_tasks_only_returns_own(async_client, user_token, other_token):
    await create_task(async_client, user_token, title="mine")
    await create_task(async_client, other_token, title="theirs")

    response = await async_client.get("/api/v1/tasks", headers=auth(user_token))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["count"] == 1
    assert [t["title"] for t in data["tasks"]] == ["mine"]


async def test_list_tasks_sorted_by_priority(async_client, user_token):
    await create_task(async_client, user_token, title="low", priorityId=LOW)
    await create_task(async_client, user_token, title="urgent", priorityId=URGENT)
    await create_task(async_client, user_token, title="medium", priorityId=MEDIUM)

    response = await async_client.get(
        "/api/v1/tasks", params={"sortBy": "priority", "sortDirection": "asc"}, headers=auth(user_token)
    )

    assert [t["title"] for t in response.json()["data"]["tasks"]] == ["low", "medium", "urgent"]


async def test_list_tasks_filtered(async_client, user_token):
    await create_task(async_client, user_token, title="high-done", priorityId=HIGH, status="COMPLETED")
    await create_task(async_client, user_token, title="urgent-done", priorityId=URGENT, status="COMPLETED")
    await create_task(async_client, user_token, title="high-open", priorityId=HIGH)
    await create_task(async_client, user_token, title="low-done", priorityId=LOW, status="COMPLETED")

    response = await async_client.get(
        "/api/v1/tasks",
        params=[("priorityIds", HIGH), ("priorityIds", URGENT), ("statuses", "COMPLETED"),
                ("sortBy", "priority"), ("sortDirection", "desc")],
        headers=auth(user_token),
    )

    assert response.status_code == 200
    assert [t["title"] for t in response.json()["data"]["tasks"]] == ["urgent-done", "high-done"]


async def test_list_tasks_with_invalid_sort_field(async_client, user_token):
    response = await async_client.get("/api/v1/tasks", params={"sortBy": "title"}, headers=auth(user_token))
    assert response.status_code == 422


async def test_get_task_of_other_user_is_404(async_client, user_token, other_token):
    task = await create_task(async_client, user_token)
    response = await async_client.get(f"/api/v1/tasks/{task['id']}", headers=auth(other_token))
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


async def test_update_task_partially(async_client, user_token):
    task = await create_task(async_client, user_token, title="draft", description="keep")

    response = await async_client.patch(
        f"/api/v1/tasks/{task['id']}", json={"status": "IN_PROGRESS"}, headers=auth(user_token)
    )

    assert response.status_code == 200
    updated = response.json()["data"]["task"]
    assert updated["status"] == "IN_PROGRESS"
    assert updated["title"] == "draft"
    assert updated["description"] == "keep"


async def test_update_task_of_other_user_is_403(async_client, user_token, other_token):
    task = await create_task(async_client, user_token)
    response = await async_client.patch(
        f"/api/v1/tasks/{task['id']}", json={"title": "mine now"}, headers=auth(other_token)
    )
    assert response.status_code == 403
    assert response.json()["error"] == "You do not have permission to update this task"


async def test_delete_task(async_client, user_token, other_token):
    task = await create_task(async_client, user_token)

    response = await async_client.delete(f"/api/v1/tasks/{task['id']}", headers=auth(other_token))
    assert response.status_code == 403

    response = await async_client.delete(f"/api/v1/tasks/{task['id']}", headers=auth(user_token))
    assert response.status_code == 200
    assert response.json()["message"] == "Task deleted successfully"

    response = await async_client.get(f"/api/v1/tasks/{task['id']}", headers=auth(user_token))
    assert response.status_code == 404


async def test_malformed_task_id(async_client, user_token):
    response = await async_client.get("/api/v1/tasks/not-a-uuid", headers=auth(user_token))
    assert response.status_code == 422
