"""Pydantic schemas for API validation."""

from app.schemas.admin import CreateUserRequest, UpdateUserRequest, UserDetailResponse
from app.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    ResendVerificationRequest,
    ResetPasswordRequest,
    TokenResponse,
    UserInfo,
)
from app.schemas.common import (
    ErrorDetail,
    ErrorResponse,
    MessageResponse,
    PaginatedResponse,
)
from app.schemas.settings import (
    ChangePasswordRequest,
    ProfileResponse,
    UpdateProfileRequest,
    UpdateProfileResponse,
)

__all__ = [
    # Admin schemas
    "CreateUserRequest",
    "UpdateUserRequest",
    "UserDetailResponse",
    # Auth schemas
    "ForgotPasswordRequest",
    "LoginRequest",
    "RegisterRequest",
    "RegisterResponse",
    "ResendVerificationRequest",
    "ResetPasswordRequest",
    "TokenResponse",
    "UserInfo",
    # Common schemas
    "ErrorDetail",
    "ErrorResponse",
    "MessageResponse",
    "PaginatedResponse",
    # Settings schemas
    "ChangePasswordRequest",
    "ProfileResponse",
    "UpdateProfileRequest",
    "UpdateProfileResponse",
]
