"""SQLAlchemy ORM models."""

from app.models.email_verification_token import EmailVerificationToken
from app.models.password_reset_token import PasswordResetToken
from app.models.security_audit_log import SecurityAuditLog
from app.models.session import Session
from app.models.user import User

__all__ = [
    "EmailVerificationToken",
    "PasswordResetToken",
    "SecurityAuditLog",
    "Session",
    "User",
]
