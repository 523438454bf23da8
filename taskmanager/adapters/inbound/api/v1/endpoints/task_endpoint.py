# taskmanager/adapters/inbound/api/v1/endpoints/task_endpoint.py

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from taskmanager.adapters.inbound.api.deps import get_current_user, get_task_service
from taskmanager.application.dtos.base_dto import ApiResponse, MessageResponse
from taskmanager.application.dtos.task_dto import (
    TaskCreate,
    TaskData,
    TaskListData,
    TaskOutput,
    TaskUpdate,
)
from taskmanager.application.use_cases.task_use_cases import AsyncTaskService
from taskmanager.domain.models.task import (
    SortDirection,
    Task,
    TaskChanges,
    TaskFilter,
    TaskSortField,
    TaskStatus,
)
from taskmanager.domain.models.user import User
from taskmanager.shared.utils.datetime_utils import DateTimeUtil
from taskmanager.shared.utils.error_responses import resource_errors

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
    responses=resource_errors,
)


@router.post(
    "",
    response_model=ApiResponse[TaskData],
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
)
async def create_task(
        task_input: TaskCreate,
        user: User = Depends(get_current_user),
        service: AsyncTaskService = Depends(get_task_service),
):
    task = await service.create_task(Task(
        id=None,
        title=task_input.title,
        description=task_input.description,
        status=task_input.status,
        priority_id=task_input.priority_id,
        category_id=task_input.category_id,
        due_date=DateTimeUtil.ensure_utc(task_input.due_date),
        created_by_id=user.id,
    ))
    return ApiResponse[TaskData](
        message="Task created successfully",
        data=TaskData(task=TaskOutput.model_validate(task)),
    )


@router.get(
    "",
    response_model=ApiResponse[TaskListData],
    summary="List my tasks",
    description="Lists the current user's tasks with optional filters and sorting.",
)
async def list_tasks(
        priority_ids: List[int] = Query([], alias="priorityIds"),
        statuses: List[TaskStatus] = Query([]),
        due_date_from: Optional[datetime] = Query(None, alias="dueDateFrom"),
        due_date_to: Optional[datetime] = Query(None, alias="dueDateTo"),
        created_at_from: Optional[datetime] = Query(None, alias="createdAtFrom"),
        created_at_to: Optional[datetime] = Query(None, alias="createdAtTo"),
        sort_by: TaskSortField = Query(TaskSortField.CREATED_AT, alias="sortBy"),
        sort_direction: SortDirection = Query(SortDirection.DESC, alias="sortDirection"),
        user: User = Depends(get_current_user),
        service: AsyncTaskService = Depends(get_task_service),
):
    task_filter = TaskFilter(
        priority_ids=priority_ids,
        statuses=statuses,
        due_date_from=DateTimeUtil.ensure_utc(due_date_from),
        due_date_to=DateTimeUtil.ensure_utc(due_date_to),
        created_at_from=DateTimeUtil.ensure_utc(created_at_from),
        created_at_to=DateTimeUtil.ensure_utc(created_at_to),
        sort_by=sort_by,
        sort_direction=sort_direction,
    )
    tasks = await service.list_tasks(user.id, task_filter)
    return ApiResponse[TaskListData](
        data=TaskListData(tasks=[TaskOutput.model_validate(t) for t in tasks], count=len(tasks)),
    )


@router.get(
    "/{task_id}",
    response_model=ApiResponse[TaskData],
    summary="Get one of my tasks",
)
async def get_task(
        task_id: UUID,
        user: User = Depends(get_current_user),
        service: AsyncTaskService = Depends(get_task_service),
):
    task = await service.get_task(task_id, user.id)
    return ApiResponse[TaskData](data=TaskData(task=TaskOutput.model_validate(task)))


@router.patch(
    "/{task_id}",
    response_model=ApiResponse[TaskData],
    summary="Update a task",
    description="Partial update: only the fields sent are changed.",
)
async def update_task(
        task_id: UUID,
        task_input: TaskUpdate,
        user: User = Depends(get_current_user),
        service: AsyncTaskService = Depends(get_task_service),
):
    data = task_input.model_dump(exclude_unset=True)
    if "due_date" in data:
        data["due_date"] = DateTimeUtil.ensure_utc(data["due_date"])
    task = await service.update_task(task_id, user.id, TaskChanges.from_mapping(data))
    return ApiResponse[TaskData](
        message="Task updated successfully",
        data=TaskData(task=TaskOutput.model_validate(task)),
    )


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete a task",
)
async def delete_task(
        task_id: UUID,
        user: User = Depends(get_current_user),
        service: AsyncTaskService = Depends(get_task_service),
):
    await service.delete_task(task_id, user.id)
    return MessageResponse(message="Task deleted successfully")
