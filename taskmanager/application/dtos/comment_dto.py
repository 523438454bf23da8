# taskmanager/application/dtos/comment_dto.py

from uuid import UUID
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from taskmanager.application.dtos.base_dto import CustomBaseModel
from taskmanager.application.dtos.user_dto import UserSummaryOutput
from taskmanager.shared.utils.input_validation import InputValidator


def _check_content(v: str) -> str:
    is_valid, error_msg = InputValidator.validate_text(v, "Comment", InputValidator.MAX_COMMENT_LENGTH)
    if not is_valid:
        raise ValueError(error_msg)
    return v


class CommentCreate(CustomBaseModel):
    content: str = Field(..., description="Comment text, 1 to 1000 characters.")
    task_id: UUID

    @field_validator("content")
    def validate_content(cls, v):
        return _check_content(v)


class CommentUpdate(CustomBaseModel):
    content: str

    @field_validator("content")
    def validate_content(cls, v):
        return _check_content(v)


class CommentOutput(CustomBaseModel):
    id: UUID
    content: str
    task_id: UUID
    author_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    author: Optional[UserSummaryOutput] = None


class CommentData(CustomBaseModel):
    comment: CommentOutput


class CommentListData(CustomBaseModel):
    comments: List[CommentOutput]
    count: int
