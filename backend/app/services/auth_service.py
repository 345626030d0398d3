"""Authentication service: registration, login, sessions and credential changes.

State per account: registered (unverified) -> verified, with any number of
live sessions. Every credential change revokes sessions through the session
store; every token check re-reads the store instead of trusting earlier
results.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.constants import NotificationKind, UserRole
from app.exceptions import (
    AlreadyUsedError,
    AuthenticationError,
    ConflictError,
    ExpiredError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from app.models.user import User
from app.services.notifications import NotificationSink
from app.services.password_service import PasswordService
from app.services.repositories import (
    PasswordResetTokenRepository,
    SessionRepository,
    UserRepository,
    VerificationTokenRepository,
)
from app.services.repositories.user_repository import normalize_email
from app.services.security_audit_service import SecurityAuditService, SecurityEventType
from app.services.token_service import generate_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """Bearer token plus the user it was issued to."""

    token: str
    user: User


class AuthService:
    """Orchestrates the authentication flows over the repositories."""

    def __init__(
        self,
        db: Session,
        notifier: NotificationSink,
        audit: SecurityAuditService | None = None,
        require_verified_email: bool | None = None,
    ) -> None:
        self._db = db
        self._notifier = notifier
        self._audit = audit or SecurityAuditService(db)
        self._users = UserRepository(db)
        self._sessions = SessionRepository(db)
        self._verification_tokens = VerificationTokenRepository(db)
        self._reset_tokens = PasswordResetTokenRepository(db)
        if require_verified_email is None:
            require_verified_email = settings.require_verified_email
        self._require_verified_email = require_verified_email

    def register(self, email: str, password: str, name: str) -> str:
        """Create an unverified USER account and send its verification token."""
        email = normalize_email(email)
        if self._users.exists_by_email(email):
            raise ConflictError("Email already exists")

        password_hash = PasswordService.hash_password(password)

        user = User(
            email=email,
            password_hash=password_hash,
            name=name.strip(),
            role=UserRole.USER,
            email_verified=False,
        )
        try:
            self._users.save(user)
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self._db.rollback()
            raise ConflictError("Email already exists") from None

        token = generate_token()
        self._verification_tokens.create(
            user.id, token, timedelta(hours=settings.verification_token_expire_hours)
        )
        self._audit.log_event(SecurityEventType.REGISTERED, user_id=user.id)
        self._db.commit()

        self._notifier.notify(user.email, NotificationKind.VERIFICATION, token)
        logger.info("User registered (pending verification): %s", user.id)
        return user.id

    def login(self, email: str, password: str) -> LoginResult:
        """Check credentials and open a new session alongside any existing ones."""
        user = self._users.find_by_email(email)
        if user is None:
            # Perform dummy password verification to prevent timing-based email enumeration
            PasswordService.verify_password(password, PasswordService.get_dummy_hash())
            self._record_failed_login(None, "user_not_found")
            raise AuthenticationError()

        if not PasswordService.verify_password(password, user.password_hash):
            self._record_failed_login(user.id, "invalid_password")
            raise AuthenticationError()

        if self._require_verified_email and not user.email_verified:
            self._audit.log_event(SecurityEventType.LOGIN_BLOCKED_UNVERIFIED, user_id=user.id)
            self._db.commit()
            raise ForbiddenError("Please verify your email before logging in")

        token = generate_token()
        self._sessions.create(user.id, token, timedelta(hours=settings.session_expire_hours))
        self._audit.log_event(SecurityEventType.LOGIN_SUCCESS, user_id=user.id)
        self._db.commit()

        logger.info("User logged in: %s", user.id)
        return LoginResult(token=token, user=user)

    def _record_failed_login(self, user_id: str | None, reason: str) -> None:
        self._audit.log_event(
            SecurityEventType.LOGIN_FAILED, user_id=user_id, details={"reason": reason}
        )
        self._db.commit()

    def logout(self, token: str) -> None:
        """Delete the session holding `token`; unknown tokens are ignored."""
        session = self._sessions.find_by_token(token)
        deleted = self._sessions.delete_by_token(token)
        if session is not None:
            self._audit.log_event(SecurityEventType.LOGOUT, user_id=session.user_id)
        self._db.commit()

        if deleted:
            logger.info("Session revoked by logout")

    def verify_email(self, token: str) -> None:
        """Consume a verification token and mark its account verified."""
        record = self._verification_tokens.find_by_token(token)
        if record is None:
            raise NotFoundError("Invalid verification token")
        if record.consumed:
            raise AlreadyUsedError("Verification token has already been used")
        if record.is_expired():
            raise ExpiredError("Verification token has expired")

        if not self._verification_tokens.mark_consumed(record):
            self._db.rollback()
            raise AlreadyUsedError("Verification token has already been used")

        user = self._users.find_by_id(record.user_id)
        if user is None:
            self._db.rollback()
            raise NotFoundError("User not found")

        user.email_verified = True
        self._audit.log_event(SecurityEventType.EMAIL_VERIFIED, user_id=user.id)
        self._db.commit()

        self._notifier.notify(user.email, NotificationKind.WELCOME)
        logger.info("Email verified for user: %s", user.id)

    def resend_verification(self, email: str) -> None:
        """Replace outstanding verification tokens of an unverified account.

        Silent for unknown or already verified emails.
        """
        user = self._users.find_by_email(email)
        if user is None or user.email_verified:
            return

        self._verification_tokens.delete_unconsumed_for_user(user.id)
        token = generate_token()
        self._verification_tokens.create(
            user.id, token, timedelta(hours=settings.verification_token_expire_hours)
        )
        self._audit.log_event(SecurityEventType.VERIFICATION_RESENT, user_id=user.id)
        self._db.commit()

        self._notifier.notify(user.email, NotificationKind.VERIFICATION, token)
        logger.info("Verification email resent for user: %s", user.id)

    def forgot_password(self, email: str) -> None:
        """Issue a fresh reset token; silently does nothing for unknown emails."""
        user = self._users.find_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        # One outstanding reset token per user
        self._reset_tokens.delete_unconsumed_for_user(user.id)
        token = generate_token()
        self._reset_tokens.create(
            user.id, token, timedelta(hours=settings.password_reset_token_expire_hours)
        )
        self._audit.log_event(SecurityEventType.PASSWORD_RESET_REQUESTED, user_id=user.id)
        self._db.commit()

        self._notifier.notify(user.email, NotificationKind.PASSWORD_RESET, token)
        logger.info("Password reset email queued for user: %s", user.id)

    def reset_password(self, token: str, new_password: str) -> None:
        """Set a new password from a reset token and sign out every session."""
        record = self._reset_tokens.find_by_token(token)
        if record is None:
            raise NotFoundError("Invalid password reset token")
        if record.consumed:
            raise AlreadyUsedError("Password reset token has already been used")
        if record.is_expired():
            raise ExpiredError("Password reset token has expired")

        user = self._users.find_by_id(record.user_id)
        if user is None:
            raise NotFoundError("User not found")

        password_hash = PasswordService.hash_password(new_password)

        user.password_hash = password_hash
        self._reset_tokens.delete_all_for_user(user.id)
        revoked = self._sessions.delete_all_for_user(user.id)
        self._audit.log_event(
            SecurityEventType.PASSWORD_RESET_COMPLETED,
            user_id=user.id,
            details={"sessions_revoked": revoked},
        )
        self._db.commit()

        self._notifier.notify(user.email, NotificationKind.PASSWORD_CHANGED)
        logger.info("Password reset for user %s, %d session(s) revoked", user.id, revoked)

    def change_password(
        self,
        user_id: str,
        current_token: str,
        current_password: str,
        new_password: str,
    ) -> None:
        """Change password and revoke every other session of the user.

        The session holding `current_token` stays logged in.
        """
        user = self._users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")

        if not PasswordService.verify_password(current_password, user.password_hash):
            raise ValidationError("Current password is incorrect")

        password_hash = PasswordService.hash_password(new_password)

        user.password_hash = password_hash
        revoked = self._sessions.delete_all_for_user_except(user.id, current_token)
        self._audit.log_event(
            SecurityEventType.PASSWORD_CHANGED,
            user_id=user.id,
            details={"sessions_revoked": revoked},
        )
        self._db.commit()

        self._notifier.notify(user.email, NotificationKind.PASSWORD_CHANGED)
        logger.info("Password changed for user %s, %d other session(s) revoked", user.id, revoked)
