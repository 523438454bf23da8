# taskmanager/application/ports/outbound/task_store_port.py

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from taskmanager.domain.models.task import (
    Comment,
    Task,
    TaskCategory,
    TaskChanges,
    TaskFilter,
    TaskPriority,
)


class ITaskStore(ABC):
    """Persistence interface for tasks, comments and their reference data."""

    # Reference data

    @abstractmethod
    async def get_category(self, category_id: int) -> Optional[TaskCategory]:
        pass

    @abstractmethod
    async def list_categories(self) -> List[TaskCategory]:
        pass

    @abstractmethod
    async def create_category(self, name: str) -> TaskCategory:
        pass

    @abstractmethod
    async def get_priority(self, priority_id: int) -> Optional[TaskPriority]:
        pass

    @abstractmethod
    async def list_priorities(self) -> List[TaskPriority]:
        pass

    @abstractmethod
    async def create_priority(self, name: str, level: int) -> TaskPriority:
        pass

    # Tasks

    @abstractmethod
    async def create_task(self, task: Task) -> Task:
        """Persist and return the task with category, priority and owner loaded."""

    @abstractmethod
    async def get_task(self, task_id: UUID) -> Optional[Task]:
        pass

    @abstractmethod
    async def list_tasks(self, owner_id: UUID, task_filter: TaskFilter) -> List[Task]:
        pass

    @abstractmethod
    async def update_task(self, task_id: UUID, changes: TaskChanges) -> Optional[Task]:
        pass

    @abstractmethod
    async def delete_task(self, task_id: UUID) -> bool:
        pass

    # Comments

    @abstractmethod
    async def create_comment(self, comment: Comment) -> Comment:
        pass

    @abstractmethod
    async def get_comment(self, comment_id: UUID) -> Optional[Comment]:
        pass

    @abstractmethod
    async def list_comments(self, task_id: UUID) -> List[Comment]:
        """Comments of a task, newest first."""

    @abstractmethod
    async def update_comment(self, comment_id: UUID, content: str) -> Optional[Comment]:
        pass

    @abstractmethod
    async def delete_comment(self, comment_id: UUID) -> bool:
        pass
