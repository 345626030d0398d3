"""Schemas for admin endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.auth import (
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    validate_name_not_blank,
    validate_password_not_blank,
)

Role = Literal["USER", "ADMIN"]


class UserDetailResponse(BaseModel):
    """Schema for user details shown to admins."""

    id: str
    email: str
    name: str
    role: str
    email_verified: bool
    created_at: datetime
    active_sessions: int = 0

    model_config = {"from_attributes": True}


class CreateUserRequest(BaseModel):
    """Request schema for admin user creation."""

    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    name: str = Field(min_length=1, max_length=255)
    role: Role = "USER"

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_not_blank(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_name_not_blank(v)


class UpdateUserRequest(BaseModel):
    """Request schema for admin user update; omitted fields stay unchanged."""

    email: EmailStr | None = None
    name: str | None = Field(None, min_length=1, max_length=255)
    role: Role | None = None
    email_verified: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return validate_name_not_blank(v)
