# taskmanager/domain/models/task.py

"""
Modelos de domínio para tarefas, categorias, prioridades e comentários.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
from uuid import UUID

from taskmanager.domain.models.user import UserSummary


class TaskStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class TaskSortField(str, Enum):
    PRIORITY = "priority"
    STATUS = "status"
    DUE_DATE = "dueDate"
    CREATED_AT = "createdAt"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class TaskCategory:
    id: Optional[int]
    name: str


@dataclass
class TaskPriority:
    """Prioridade de tarefa; `level` é a chave de ordenação (LOW=1 ... URGENT=4)."""
    id: Optional[int]
    name: str
    level: int


@dataclass
class Task:
    id: Optional[UUID]
    title: str
    priority_id: int
    category_id: int
    created_by_id: UUID
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    due_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: Optional[TaskCategory] = None
    priority: Optional[TaskPriority] = None
    created_by: Optional[UserSummary] = None

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.created_by_id == user_id


@dataclass
class TaskChanges:
    """Alterações parciais de uma tarefa; só os campos em `fields_set` são aplicados."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority_id: Optional[int] = None
    category_id: Optional[int] = None
    due_date: Optional[datetime] = None
    fields_set: frozenset = field(default_factory=frozenset)

    FIELDS = ("title", "description", "status", "priority_id", "category_id", "due_date")

    @classmethod
    def from_mapping(cls, data: dict) -> "TaskChanges":
        allowed = {k: v for k, v in data.items() if k in cls.FIELDS}
        return cls(**allowed, fields_set=frozenset(allowed))

    def has(self, name: str) -> bool:
        return name in self.fields_set

    def as_dict(self) -> dict:
        return {name: getattr(self, name) for name in self.FIELDS if name in self.fields_set}


@dataclass
class TaskFilter:
    """Filtros e ordenação da listagem de tarefas de um usuário."""
    priority_ids: List[int] = field(default_factory=list)
    statuses: List[TaskStatus] = field(default_factory=list)
    due_date_from: Optional[datetime] = None
    due_date_to: Optional[datetime] = None
    created_at_from: Optional[datetime] = None
    created_at_to: Optional[datetime] = None
    sort_by: TaskSortField = TaskSortField.CREATED_AT
    sort_direction: SortDirection = SortDirection.DESC


@dataclass
class Comment:
    id: Optional[UUID]
    content: str
    task_id: UUID
    author_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    author: Optional[UserSummary] = None

    def is_authored_by(self, user_id: UUID) -> bool:
        return self.author_id == user_id
