"""Authentication router."""

from fastapi import APIRouter, Depends, Query, status

from app.dependencies.auth import get_auth_service, get_bearer_token, get_current_user
from app.models.user import User
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
from app.schemas.common import MessageResponse
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, auth: AuthService = Depends(get_auth_service)) -> dict:
    """Register a new user and send verification email."""
    user_id = auth.register(data.email, data.password, data.name)
    return {
        "message": "Registration successful. Please check your email to verify your account.",
        "user_id": user_id,
    }


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, auth: AuthService = Depends(get_auth_service)) -> dict:
    """Login and get a session token."""
    result = auth.login(data.email, data.password)
    return {
        "token": result.token,
        "token_type": "bearer",
        "user": UserInfo.model_validate(result.user),
    }


@router.post("/logout", response_model=MessageResponse)
def logout(
    token: str | None = Depends(get_bearer_token),
    auth: AuthService = Depends(get_auth_service),
) -> dict:
    """Logout and delete the session; unknown or missing tokens are ignored."""
    if token:
        auth.logout(token)
    return {"message": "Successfully logged out"}


@router.get("/verify", response_model=MessageResponse)
def verify_email(
    token: str = Query(..., min_length=1),
    auth: AuthService = Depends(get_auth_service),
) -> dict:
    """Verify email with token from email link."""
    auth.verify_email(token)
    return {"message": "Email verified successfully. You can now log in."}


@router.post("/resend-verification", response_model=MessageResponse)
def resend_verification(
    data: ResendVerificationRequest, auth: AuthService = Depends(get_auth_service)
) -> dict:
    """Resend verification email."""
    auth.resend_verification(data.email)
    # Always return success (don't reveal if email exists)
    return {"message": "If that email exists and is unverified, we sent a new verification link."}


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    data: ForgotPasswordRequest, auth: AuthService = Depends(get_auth_service)
) -> dict:
    """Request password reset email."""
    auth.forgot_password(data.email)
    # Always return success (don't reveal if email exists)
    return {"message": "If that email exists, we sent a password reset link."}


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(
    data: ResetPasswordRequest, auth: AuthService = Depends(get_auth_service)
) -> dict:
    """Reset password with token from email."""
    auth.reset_password(data.token, data.new_password)
    return {"message": "Password reset successfully. You can now log in with your new password."}


@router.get("/me", response_model=UserInfo)
def get_me(current_user: User = Depends(get_current_user)) -> User:
    """Get the current authenticated user's information."""
    return current_user
