"""Service for logging security events."""

import logging

from fastapi import Request
from sqlalchemy.orm import Session

from app.models.security_audit_log import SecurityAuditLog

logger = logging.getLogger(__name__)


class SecurityEventType:
    """Constants for security event types."""

    REGISTERED = "registered"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGIN_BLOCKED_UNVERIFIED = "login_blocked_unverified"
    LOGOUT = "logout"
    EMAIL_VERIFIED = "email_verified"
    VERIFICATION_RESENT = "verification_resent"
    PASSWORD_CHANGED = "password_changed"
    PASSWORD_RESET_REQUESTED = "password_reset_requested"
    PASSWORD_RESET_COMPLETED = "password_reset_completed"
    ADMIN_USER_CREATED = "admin_user_created"
    ADMIN_USER_UPDATED = "admin_user_updated"
    ADMIN_USER_DELETED = "admin_user_deleted"


class RequestInfo:
    """Client address and user agent of the request being served."""

    def __init__(self, ip_address: str | None = None, user_agent: str | None = None) -> None:
        self.ip_address = ip_address
        self.user_agent = user_agent

    @classmethod
    def from_request(cls, request: Request | None) -> "RequestInfo":
        if request is None:
            return cls()

        # Get IP from X-Forwarded-For header (if behind proxy) or client host
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            ip_address = forwarded_for.split(",")[0].strip()
        elif request.client:
            ip_address = request.client.host
        else:
            ip_address = None

        return cls(ip_address, request.headers.get("User-Agent", "")[:500])


class SecurityAuditService:
    """Records security audit events alongside the caller's transaction."""

    def __init__(self, db: Session, request_info: RequestInfo | None = None) -> None:
        self._db = db
        self._request_info = request_info or RequestInfo()

    def log_event(
        self,
        event_type: str,
        user_id: str | None = None,
        details: dict | None = None,
    ) -> None:
        """Add an audit row; the caller commits it with the rest of the operation."""
        self._db.add(
            SecurityAuditLog(
                user_id=user_id,
                event_type=event_type,
                ip_address=self._request_info.ip_address,
                user_agent=self._request_info.user_agent,
                details=details,
            )
        )

        # Also log to application logger for monitoring
        logger.info(
            "Security event: %s | user_id=%s | ip=%s",
            event_type,
            user_id,
            self._request_info.ip_address,
        )
