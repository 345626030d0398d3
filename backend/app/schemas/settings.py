"""Schemas for profile settings endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.schemas.auth import (
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    validate_name_not_blank,
    validate_password_not_blank,
)


class ProfileResponse(BaseModel):
    """Schema for the signed-in user's profile."""

    id: str
    email: str
    name: str
    role: str
    created_at: datetime

    model_config = {"from_attributes": True}


class UpdateProfileRequest(BaseModel):
    """Schema for updating profile name."""

    name: str = Field(min_length=1, max_length=255)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_name_not_blank(v)


class UpdateProfileResponse(BaseModel):
    name: str


class ChangePasswordRequest(BaseModel):
    """Schema for changing password while logged in."""

    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_not_blank(v)
