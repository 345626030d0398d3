"""User data access layer (credential store)."""

import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.models import User

logger = logging.getLogger(__name__)


def _escape_like(value: str) -> str:
    """Make `%` and `_` match literally inside a LIKE pattern."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively; store and compare lower-cased."""
    return email.strip().lower()


class UserRepository:
    """Centralized user data access.

    Naming conventions:
    - find_* : Query that may return None
    - exists_* : Boolean existence check
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_id(self, user_id: str) -> User | None:
        """Find user by primary key."""
        return self._db.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str) -> User | None:
        """Find user by email (case-insensitive)."""
        return (
            self._db.query(User)
            .filter(func.lower(User.email) == normalize_email(email))
            .first()
        )

    def exists_by_email(self, email: str) -> bool:
        """Whether any user already holds this email (case-insensitive)."""
        return self.find_by_email(email) is not None

    def save(self, user: User) -> User:
        """Add or update a user and flush so generated ids are available."""
        self._db.add(user)
        self._db.flush()
        return user

    def delete(self, user: User) -> None:
        self._db.delete(user)

    def search(self, search: str | None, skip: int, limit: int) -> tuple[list[User], int]:
        """Page through users, optionally filtered by email or name substring."""
        query = self._db.query(User)
        if search and search.strip():
            pattern = f"%{_escape_like(search.strip().lower())}%"
            query = query.filter(
                or_(
                    func.lower(User.email).like(pattern, escape="\\"),
                    func.lower(User.name).like(pattern, escape="\\"),
                )
            )
        total = query.count()
        users = query.order_by(User.created_at.desc(), User.id).offset(skip).limit(limit).all()
        return users, total
