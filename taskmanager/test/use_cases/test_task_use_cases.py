# taskmanager/test/use_cases/test_task_use_cases.py

# pytest taskmanager/test/use_cases/test_task_use_cases.py -v

from datetime import timedelta
from uuid import uuid4

import pytest

from taskmanager.application.use_cases.task_use_cases import AsyncTaskService
from taskmanager.domain.exceptions import (
    InvalidCategoryException,
    InvalidPriorityException,
    PermissionDeniedException,
    ResourceNotFoundException,
)
from taskmanager.domain.models.task import (
    Comment,
    SortDirection,
    Task,
    TaskChanges,
    TaskFilter,
    TaskSortField,
    TaskStatus,
)
from taskmanager.shared.utils.datetime_utils import DateTimeUtil


@pytest.fixture
def service(task_store) -> AsyncTaskService:
    return AsyncTaskService(task_store)


async def make_user(credential_store):
    role = await credential_store.get_role_by_name("USER")
    return await credential_store.create_user(f"usertest-{uuid4()}@example.com", "hash", role.id)


async def priority_id(task_store, name: str) -> int:
    return next(p.id for p in await task_store.list_priorities() if p.name == name)


async def category_id(task_store, name: str = "Work") -> int:
    return next(c.id for c in await task_store.list_categories() if c.name == name)


async def create(service, task_store, owner, title, priority="MEDIUM", **fields):
    return await service.create_task(Task(
        id=None,
        title=title,
        priority_id=await priority_id(task_store, priority),
        category_id=await category_id(task_store),
        created_by_id=owner.id,
        **fields,
    ))


async def test_create_task_loads_relations(service, task_store, credential_store):
    owner = await make_user(credential_store)
    task = await create(service, task_store, owner, "Write report", priority="HIGH")

    assert task.id is not None
    assert task.status == TaskStatus.PENDING
    assert task.priority.name == "HIGH"
    assert task.category.name == "Work"
    assert task.created_by.email == owner.email


async def test_create_task_with_unknown_references(service, task_store, credential_store):
    owner = await make_user(credential_store)
    with pytest.raises(InvalidCategoryException):
        await service.create_task(Task(id=None, title="x", priority_id=await priority_id(task_store, "LOW"),
                                       category_id=999, created_by_id=owner.id))
    with pytest.raises(InvalidPriorityException):
        await service.create_task(Task(id=None, title="x", priority_id=999,
                                       category_id=await category_id(task_store), created_by_id=owner.id))


async def test_get_task_of_other_user_is_not_found(service, task_store, credential_store):
    """Tarefa de outro usuário é tratada como inexistente na leitura."""
    owner = await make_user(credential_store)
    stranger = await make_user(credential_store)
    task = await create(service, task_store, owner, "Private")

    assert (await service.get_task(task.id, owner.id)).id == task.id
    with pytest.raises(ResourceNotFoundException):
        await service.get_task(task.id, stranger.id)


async def test_update_and_delete_require_ownership(service, task_store, credential_store):
    owner = await make_user(credential_store)
    stranger = await make_user(credential_store)
    task = await create(service, task_store, owner, "Mine")

    with pytest.raises(PermissionDeniedException):
        await service.update_task(task.id, stranger.id, TaskChanges.from_mapping({"title": "Hacked"}))
    with pytest.raises(PermissionDeniedException):
        await service.delete_task(task.id, stranger.id)
    with pytest.raises(ResourceNotFoundException):
        await service.delete_task(uuid4(), owner.id)


async def test_partial_update_changes_only_sent_fields(service, task_store, credential_store):
    owner = await make_user(credential_store)
    due = DateTimeUtil.utcnow() + timedelta(days=3)
    task = await create(service, task_store, owner, "Original", description="keep me", due_date=due)

    updated = await service.update_task(task.id, owner.id, TaskChanges.from_mapping({
        "status": TaskStatus.COMPLETED,
        "due_date": None,
    }))

    assert updated.status == TaskStatus.COMPLETED
    assert updated.due_date is None
    assert updated.title == "Original"
    assert updated.description == "keep me"


async def test_update_with_unknown_priority(service, task_store, credential_store):
    owner = await make_user(credential_store)
    task = await create(service, task_store, owner, "Task")
    with pytest.raises(InvalidPriorityException):
        await service.update_task(task.id, owner.id, TaskChanges.from_mapping({"priority_id": 999}))


async def test_list_is_scoped_to_owner(service, task_store, credential_store):
    owner = await make_user(credential_store)
    stranger = await make_user(credential_store)
    await create(service, task_store, owner, "Mine")
    await create(service, task_store, stranger, "Theirs")

    tasks = await service.list_tasks(owner.id, TaskFilter())
    assert [t.title for t in tasks] == ["Mine"]


async def test_list_sorted_by_priority_level(service, task_store, credential_store):
    owner = await make_user(credential_store)
    await create(service, task_store, owner, "medium", priority="MEDIUM")
    await create(service, task_store, owner, "urgent", priority="URGENT")
    await create(service, task_store, owner, "low", priority="LOW")

    desc = await service.list_tasks(owner.id, TaskFilter(sort_by=TaskSortField.PRIORITY))
    asc = await service.list_tasks(owner.id, TaskFilter(sort_by=TaskSortField.PRIORITY,
                                                        sort_direction=SortDirection.ASC))

    assert [t.title for t in desc] == ["urgent", "medium", "low"]
    assert [t.title for t in asc] == ["low", "medium", "urgent"]


async def test_list_filters_by_status_and_priority(service, task_store, credential_store):
    owner = await make_user(credential_store)
    await create(service, task_store, owner, "done-high", priority="HIGH", status=TaskStatus.COMPLETED)
    await create(service, task_store, owner, "pending-high", priority="HIGH")
    await create(service, task_store, owner, "done-low", priority="LOW", status=TaskStatus.COMPLETED)

    high = await priority_id(task_store, "HIGH")
    tasks = await service.list_tasks(owner.id, TaskFilter(priority_ids=[high], statuses=[TaskStatus.COMPLETED]))
    assert [t.title for t in tasks] == ["done-high"]


async def test_list_due_date_sort_puts_missing_dates_last(service, task_store, credential_store):
    owner = await make_user(credential_store)
    now = DateTimeUtil.utcnow()
    await create(service, task_store, owner, "no-date")
    await create(service, task_store, owner, "later", due_date=now + timedelta(days=5))
    await create(service, task_store, owner, "sooner", due_date=now + timedelta(days=1))

    asc = await service.list_tasks(owner.id, TaskFilter(sort_by=TaskSortField.DUE_DATE,
                                                        sort_direction=SortDirection.ASC))
    desc = await service.list_tasks(owner.id, TaskFilter(sort_by=TaskSortField.DUE_DATE))

    assert [t.title for t in asc] == ["sooner", "later", "no-date"]
    assert [t.title for t in desc] == ["later", "sooner", "no-date"]


async def test_list_due_date_range(service, task_store, credential_store):
    owner = await make_user(credential_store)
    now = DateTimeUtil.utcnow()
    await create(service, task_store, owner, "in-range", due_date=now + timedelta(days=2))
    await create(service, task_store, owner, "too-late", due_date=now + timedelta(days=10))
    await create(service, task_store, owner, "no-date")

    tasks = await service.list_tasks(owner.id, TaskFilter(due_date_from=now, due_date_to=now + timedelta(days=5)))
    assert [t.title for t in tasks] == ["in-range"]


async def test_deleting_task_removes_its_comments(service, task_store, credential_store, memory_db):
    owner = await make_user(credential_store)
    task = await create(service, task_store, owner, "With comments")
    await task_store.create_comment(Comment(id=None, content="hi", task_id=task.id, author_id=owner.id))

    await service.delete_task(task.id, owner.id)
    assert await task_store.list_comments(task.id) == []
    assert memory_db.comments == {}
