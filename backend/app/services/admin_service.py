"""User management for administrators."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, ForbiddenError, NotFoundError
from app.models.user import User
from app.services.password_service import PasswordService
from app.services.repositories import (
    PasswordResetTokenRepository,
    SessionRepository,
    UserRepository,
    VerificationTokenRepository,
)
from app.services.repositories.user_repository import normalize_email
from app.services.security_audit_service import SecurityAuditService, SecurityEventType

logger = logging.getLogger(__name__)


class UserManagementService:
    """Admin-only operations on any account.

    Access control happens in the router dependency; this service assumes
    the caller is already known to be an admin.
    """

    def __init__(self, db: Session, audit: SecurityAuditService | None = None) -> None:
        self._db = db
        self._audit = audit or SecurityAuditService(db)
        self._users = UserRepository(db)
        self._sessions = SessionRepository(db)
        self._verification_tokens = VerificationTokenRepository(db)
        self._reset_tokens = PasswordResetTokenRepository(db)

    def list_users(self, search: str | None, skip: int, limit: int) -> tuple[list[User], int]:
        return self._users.search(search, skip, limit)

    def get_user(self, user_id: str) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        return user

    def create_user(self, admin_id: str, email: str, password: str, name: str, role: str) -> User:
        """Create an account; admin-created accounts are verified from the start."""
        email = normalize_email(email)
        if self._users.exists_by_email(email):
            raise ConflictError("Email already exists")

        user = User(
            email=email,
            password_hash=PasswordService.hash_password(password),
            name=name.strip(),
            role=role,
            email_verified=True,
        )
        self._save_or_conflict(user)
        self._audit.log_event(
            SecurityEventType.ADMIN_USER_CREATED,
            user_id=user.id,
            details={"admin_id": admin_id, "role": role},
        )
        self._db.commit()

        logger.info("Admin %s created user %s", admin_id, user.id)
        return user

    def update_user(
        self,
        admin_id: str,
        user_id: str,
        email: str | None = None,
        name: str | None = None,
        role: str | None = None,
        email_verified: bool | None = None,
    ) -> User:
        """Update profile fields; the password is never touched here."""
        user = self.get_user(user_id)
        changes: dict = {}

        if email is not None:
            email = normalize_email(email)
            if email != user.email:
                if self._users.exists_by_email(email):
                    raise ConflictError("Email already exists")
                user.email = email
                changes["email"] = True
        if name is not None:
            user.name = name.strip()
            changes["name"] = True
        if role is not None and role != user.role:
            changes["role"] = {"from": user.role, "to": role}
            user.role = role
        if email_verified is not None:
            user.email_verified = email_verified
            changes["email_verified"] = email_verified

        self._save_or_conflict(user)
        self._audit.log_event(
            SecurityEventType.ADMIN_USER_UPDATED,
            user_id=user.id,
            details={"admin_id": admin_id, "changes": changes},
        )
        self._db.commit()

        logger.info("Admin %s updated user %s", admin_id, user.id)
        return user

    def delete_user(self, admin_id: str, user_id: str) -> None:
        """Delete an account after explicitly removing its sessions and tokens."""
        if admin_id == user_id:
            raise ForbiddenError("Cannot delete your own account")

        user = self.get_user(user_id)

        sessions = self._sessions.delete_all_for_user(user.id)
        self._verification_tokens.delete_all_for_user(user.id)
        self._reset_tokens.delete_all_for_user(user.id)
        self._users.delete(user)
        self._audit.log_event(
            SecurityEventType.ADMIN_USER_DELETED,
            details={"admin_id": admin_id, "deleted_user_id": user_id, "sessions_revoked": sessions},
        )
        self._db.commit()

        logger.info("Admin %s deleted user %s", admin_id, user_id)

    def _save_or_conflict(self, user: User) -> None:
        try:
            self._users.save(user)
        except IntegrityError:
            self._db.rollback()
            raise ConflictError("Email already exists") from None
