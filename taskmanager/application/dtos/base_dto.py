# taskmanager/application/dtos/base_dto.py

"""
Base schema shared by all DTOs.

Payloads are exchanged in camelCase (accessToken, roleId, dueDate) while the
Python side keeps snake_case attribute names; request bodies accept both.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CustomBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CustomBaseModel, Generic[T]):
    """Envelope for successful responses."""
    status: str = Field(default="success")
    message: Optional[str] = Field(default=None)
    data: Optional[T] = Field(default=None)


class MessageResponse(CustomBaseModel):
    status: str = Field(default="success")
    message: str
