"""Admin router for user management."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies.admin import get_admin_context
from app.dependencies.auth import get_user_management_service
from app.models.user import User
from app.schemas.admin import CreateUserRequest, UpdateUserRequest, UserDetailResponse
from app.schemas.common import MessageResponse, PaginatedResponse
from app.services.admin_service import UserManagementService
from app.services.repositories import SessionRepository
from app.services.security_context import SecurityContext

router = APIRouter(prefix="/admin", tags=["admin"])


def _user_detail(db: Session, user: User) -> UserDetailResponse:
    detail = UserDetailResponse.model_validate(user)
    detail.active_sessions = SessionRepository(db).count_for_user(user.id)
    return detail


@router.get("/users", response_model=PaginatedResponse[UserDetailResponse])
def list_users(
    search: str | None = Query(None, description="Filter by email or name"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    admin: SecurityContext = Depends(get_admin_context),
    service: UserManagementService = Depends(get_user_management_service),
) -> PaginatedResponse[UserDetailResponse]:
    """List users, newest first."""
    users, total = service.list_users(search, skip, limit)
    return PaginatedResponse[UserDetailResponse](
        items=[_user_detail(db, user) for user in users],
        total=total,
        skip=skip,
        limit=limit,
        has_more=skip + len(users) < total,
    )


@router.post("/users", response_model=UserDetailResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    data: CreateUserRequest,
    db: Session = Depends(get_db),
    admin: SecurityContext = Depends(get_admin_context),
    service: UserManagementService = Depends(get_user_management_service),
) -> UserDetailResponse:
    user = service.create_user(admin.user_id, data.email, data.password, data.name, data.role)
    return _user_detail(db, user)


@router.get("/users/{user_id}", response_model=UserDetailResponse)
def get_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: SecurityContext = Depends(get_admin_context),
    service: UserManagementService = Depends(get_user_management_service),
) -> UserDetailResponse:
    return _user_detail(db, service.get_user(user_id))


@router.put("/users/{user_id}", response_model=UserDetailResponse)
def update_user(
    user_id: str,
    data: UpdateUserRequest,
    db: Session = Depends(get_db),
    admin: SecurityContext = Depends(get_admin_context),
    service: UserManagementService = Depends(get_user_management_service),
) -> UserDetailResponse:
    """Update email, name, role or verification status of a user."""
    user = service.update_user(
        admin.user_id,
        user_id,
        email=data.email,
        name=data.name,
        role=data.role,
        email_verified=data.email_verified,
    )
    return _user_detail(db, user)


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: str,
    admin: SecurityContext = Depends(get_admin_context),
    service: UserManagementService = Depends(get_user_management_service),
) -> dict:
    """Delete a user along with their sessions and pending tokens."""
    service.delete_user(admin.user_id, user_id)
    return {"message": "User deleted"}
