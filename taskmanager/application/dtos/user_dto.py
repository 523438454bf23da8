# taskmanager/application/dtos/user_dto.py

"""
Schemas for user data.

This module defines DTOs (Data Transfer Objects) for validating and
serializing data related to users: registration, login, session tokens
and admin user management.
"""

from uuid import UUID
from datetime import datetime
from typing import Optional, List
from pydantic import (
    field_validator,
    EmailStr,
    Field,
)

from taskmanager.application.dtos.base_dto import CustomBaseModel
from taskmanager.shared.utils.input_validation import InputValidator


def _check_email(v: str) -> str:
    is_valid, error_msg = InputValidator.validate_email(v)
    if not is_valid:
        raise ValueError(error_msg)
    return v


def _check_password(v: str) -> str:
    is_valid, error_msg = InputValidator.validate_password(v)
    if not is_valid:
        raise ValueError(error_msg)
    return v


class RoleOutput(CustomBaseModel):
    id: int
    name: str


class UserBase(CustomBaseModel):
    """
    Schema base for user data.
    """
    email: EmailStr = Field(
        ...,
        description="Email of the user. Must be a valid and unique email.",
    )

    @field_validator('email')
    def validate_email_security(cls, v):
        """Validates the email format and length."""
        return _check_email(v)


class UserLogin(CustomBaseModel):
    """
    Schema for user login.
    """
    email: EmailStr = Field(..., description="Email of the user.")
    password: str = Field(..., min_length=1, description="User's password used for authentication.")


class UserCreate(UserBase):
    """
    Schema for registering (or admin-creating) a user.

    When roleId is omitted on registration the default USER role is used.
    """
    password: str = Field(..., description="User's password, between 6 characters and 72 bytes.")
    role_id: Optional[int] = Field(None, description="Role of the new user.")

    @field_validator('password')
    def validate_password_security(cls, v):
        """Validates the password length limits."""
        return _check_password(v)


class AdminUserCreate(UserCreate):
    role_id: int = Field(..., description="Role of the new user.")


class UserUpdate(CustomBaseModel):
    """
    Schema for partial user updates. Only the fields sent are changed.
    """
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    role_id: Optional[int] = None

    @field_validator('email', 'password', 'role_id', mode='before')
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator('email')
    def validate_email_security(cls, v):
        return _check_email(v)

    @field_validator('password')
    def validate_password_security(cls, v):
        return _check_password(v)


class UserOutput(CustomBaseModel):
    """
    Schema for returning user data without sensitive fields.
    """
    id: UUID = Field(..., description="User's unique identifier.")
    email: str
    role_id: int
    role: Optional[RoleOutput] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserSummaryOutput(CustomBaseModel):
    id: UUID
    email: str


class SessionUserOutput(CustomBaseModel):
    """User as returned by the auth endpoints: {id, email, role}."""
    id: UUID
    email: str
    role: Optional[str] = None


class AuthData(CustomBaseModel):
    user: SessionUserOutput
    access_token: str
    refresh_token: Optional[str] = None


class CurrentUserData(CustomBaseModel):
    user: SessionUserOutput


class UserData(CustomBaseModel):
    user: UserOutput


class RolesData(CustomBaseModel):
    roles: List[RoleOutput]
