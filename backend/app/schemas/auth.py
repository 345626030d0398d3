"""Schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field, field_validator

# bcrypt only looks at the first 72 bytes of a password
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72


def validate_name_not_blank(v: str) -> str:
    """Shared name validation logic."""
    if not v.strip():
        raise ValueError("Name is required")
    return v


def validate_password_not_blank(v: str) -> str:
    """Shared password validation logic."""
    if not v.strip():
        raise ValueError("Password must not be blank")
    if len(v.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password must not exceed {PASSWORD_MAX_LENGTH} bytes")
    return v


class RegisterRequest(BaseModel):
    """Schema for user registration."""

    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    name: str = Field(min_length=1, max_length=255)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_not_blank(v)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_name_not_blank(v)


class RegisterResponse(BaseModel):
    """Schema for registration response."""

    message: str
    user_id: str


class LoginRequest(BaseModel):
    """Schema for user login."""

    email: str  # Any string; unknown emails get the same error as bad passwords
    password: str


class UserInfo(BaseModel):
    """Public projection of a user; never includes the password hash."""

    id: str
    email: str
    name: str
    role: str

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    """Schema for login response."""

    token: str
    token_type: str = "bearer"
    user: UserInfo


class ResendVerificationRequest(BaseModel):
    """Schema for resending verification email."""

    email: EmailStr


class ForgotPasswordRequest(BaseModel):
    """Schema for requesting password reset."""

    email: EmailStr


class ResetPasswordRequest(BaseModel):
    """Schema for resetting password with token."""

    token: str = Field(min_length=1)
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_not_blank(v)
