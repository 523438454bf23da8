# taskmanager/application/dtos/task_dto.py

"""
Schemas for tasks and their reference data.
"""

from uuid import UUID
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from taskmanager.application.dtos.base_dto import CustomBaseModel
from taskmanager.application.dtos.user_dto import UserSummaryOutput
from taskmanager.domain.models.task import TaskStatus
from taskmanager.shared.utils.input_validation import InputValidator


def _check_title(v: str) -> str:
    is_valid, error_msg = InputValidator.validate_text(v, "Title", InputValidator.MAX_TITLE_LENGTH)
    if not is_valid:
        raise ValueError(error_msg)
    return v


class TaskCategoryOutput(CustomBaseModel):
    id: int
    name: str


class TaskPriorityOutput(CustomBaseModel):
    id: int
    name: str
    level: int


class TaskCreate(CustomBaseModel):
    title: str = Field(..., description="Title of the task.")
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority_id: int
    category_id: int
    due_date: Optional[datetime] = None

    @field_validator("title")
    def validate_title(cls, v):
        return _check_title(v)


class TaskUpdate(CustomBaseModel):
    """Partial update; fields not sent keep their values."""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority_id: Optional[int] = None
    category_id: Optional[int] = None
    due_date: Optional[datetime] = None

    @field_validator("title")
    def validate_title(cls, v):
        return _check_title(v) if v is not None else v

    @field_validator("status", "priority_id", "category_id")
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class TaskOutput(CustomBaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority_id: int
    category_id: int
    due_date: Optional[datetime] = None
    created_by_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: Optional[TaskCategoryOutput] = None
    priority: Optional[TaskPriorityOutput] = None
    created_by: Optional[UserSummaryOutput] = None


class TaskData(CustomBaseModel):
    task: TaskOutput


class TaskListData(CustomBaseModel):
    tasks: List[TaskOutput]
    count: int
