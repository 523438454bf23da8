# taskmanager/application/use_cases/task_use_cases.py

"""
Task use cases: creation, owner-scoped listing with filters, update and removal.
"""

import logging
from typing import List
from uuid import UUID

from taskmanager.application.ports.outbound.task_store_port import ITaskStore
from taskmanager.domain.exceptions import (
    InvalidCategoryException,
    InvalidPriorityException,
    PermissionDeniedException,
    ResourceNotFoundException,
)
from taskmanager.domain.models.task import Task, TaskChanges, TaskFilter

logger = logging.getLogger(__name__)


class AsyncTaskService:
    """Application service for tasks owned by the current user."""

    def __init__(self, store: ITaskStore):
        self.store = store

    async def create_task(self, task: Task) -> Task:
        """
        Raises:
            InvalidCategoryException / InvalidPriorityException: Unknown reference data.
        """
        await self._validate_references(task.category_id, task.priority_id)
        created = await self.store.create_task(task)
        logger.info(f"Task {created.id} created by user {created.created_by_id}")
        return created

    async def list_tasks(self, user_id: UUID, task_filter: TaskFilter) -> List[Task]:
        return await self.store.list_tasks(user_id, task_filter)

    async def get_task(self, task_id: UUID, user_id: UUID) -> Task:
        task = await self.store.get_task(task_id)
        # Tarefas de outros usuários são tratadas como inexistentes
        if not task or not task.is_owned_by(user_id):
            raise ResourceNotFoundException(
                "Task not found or you do not have permission to view it", resource_id=task_id
            )
        return task

    async def update_task(self, task_id: UUID, user_id: UUID, changes: TaskChanges) -> Task:
        task = await self._get_owned(task_id, user_id, "update")

        await self._validate_references(
            changes.category_id if changes.has("category_id") else None,
            changes.priority_id if changes.has("priority_id") else None,
        )

        updated = await self.store.update_task(task.id, changes)
        if not updated:
            raise ResourceNotFoundException("Task not found", resource_id=task_id)
        logger.info(f"Task {task_id} updated: {sorted(changes.fields_set)}")
        return updated

    async def delete_task(self, task_id: UUID, user_id: UUID) -> None:
        await self._get_owned(task_id, user_id, "delete")
        await self.store.delete_task(task_id)
        logger.info(f"Task {task_id} deleted by user {user_id}")

    async def _get_owned(self, task_id: UUID, user_id: UUID, action: str) -> Task:
        task = await self.store.get_task(task_id)
        if not task:
            raise ResourceNotFoundException("Task not found", resource_id=task_id)
        if not task.is_owned_by(user_id):
            logger.warning(f"User {user_id} tried to {action} task {task_id}")
            raise PermissionDeniedException(f"You do not have permission to {action} this task")
        return task

    async def _validate_references(self, category_id, priority_id) -> None:
        if category_id is not None and not await self.store.get_category(category_id):
            raise InvalidCategoryException()
        if priority_id is not None and not await self.store.get_priority(priority_id):
            raise InvalidPriorityException()
