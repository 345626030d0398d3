"""Authentication dependencies for protected routes."""

from fastapi import BackgroundTasks, Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.services.admin_service import UserManagementService
from app.services.auth_service import AuthService
from app.services.notifications import BackgroundEmailNotifier
from app.services.security_audit_service import RequestInfo, SecurityAuditService
from app.services.security_context import SecurityContext, SecurityContextResolver
from app.services.settings_service import SettingsService

# Missing header and wrong scheme both come through as None and are
# reported as Unauthorized by the resolver
security = HTTPBearer(auto_error=False)


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str | None:
    """Raw bearer token from the Authorization header, if any."""
    if credentials is None:
        return None
    return credentials.credentials


def get_security_context(
    request: Request,
    token: str | None = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> SecurityContext:
    """
    Resolve the caller from their session token.

    Usage:
        @router.get("/protected")
        def protected_route(context: SecurityContext = Depends(get_security_context)):
            return {"user_id": context.user_id}
    """
    context = SecurityContextResolver(db).resolve(token)
    request.state.security_context = context
    return context


def get_current_user(
    context: SecurityContext = Depends(get_security_context),
    db: Session = Depends(get_db),
) -> User:
    """Get the user row for the authenticated caller."""
    return SettingsService(db).get_profile(context.user_id)


def get_audit_service(request: Request, db: Session = Depends(get_db)) -> SecurityAuditService:
    return SecurityAuditService(db, RequestInfo.from_request(request))


def get_auth_service(
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    audit: SecurityAuditService = Depends(get_audit_service),
) -> AuthService:
    return AuthService(db, BackgroundEmailNotifier(background_tasks), audit)


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    return SettingsService(db)


def get_user_management_service(
    db: Session = Depends(get_db),
    audit: SecurityAuditService = Depends(get_audit_service),
) -> UserManagementService:
    return UserManagementService(db, audit)
