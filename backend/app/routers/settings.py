"""Profile settings router for the signed-in user."""

from fastapi import APIRouter, Depends

from app.dependencies.auth import get_auth_service, get_security_context, get_settings_service
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.settings import (
    ChangePasswordRequest,
    ProfileResponse,
    UpdateProfileRequest,
    UpdateProfileResponse,
)
from app.services.auth_service import AuthService
from app.services.security_context import SecurityContext
from app.services.settings_service import SettingsService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=ProfileResponse)
def get_profile(
    context: SecurityContext = Depends(get_security_context),
    service: SettingsService = Depends(get_settings_service),
) -> User:
    return service.get_profile(context.user_id)


@router.put("", response_model=UpdateProfileResponse)
def update_profile(
    data: UpdateProfileRequest,
    context: SecurityContext = Depends(get_security_context),
    service: SettingsService = Depends(get_settings_service),
) -> dict:
    user = service.update_profile(context.user_id, data.name)
    return {"name": user.name}


@router.put("/password", response_model=MessageResponse)
def change_password(
    data: ChangePasswordRequest,
    context: SecurityContext = Depends(get_security_context),
    auth: AuthService = Depends(get_auth_service),
) -> dict:
    """Change password while logged in; other sessions are signed out."""
    auth.change_password(context.user_id, context.token, data.current_password, data.new_password)
    return {"message": "Password changed successfully. Other sessions have been signed out."}
