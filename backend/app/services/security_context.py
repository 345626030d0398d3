"""Resolve the acting identity from a session bearer token."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.constants import UserRole
from app.exceptions import UnauthorizedError
from app.services.repositories import SessionRepository, UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SecurityContext:
    """Identity of the caller for the rest of the request."""

    user_id: str
    role: str
    token: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class SecurityContextResolver:
    """Looks up the session for a bearer token and the user behind it."""

    def __init__(self, db: Session) -> None:
        self._sessions = SessionRepository(db)
        self._users = UserRepository(db)

    def resolve(self, token: str | None) -> SecurityContext:
        """Return the caller's identity or raise UnauthorizedError.

        Missing, unknown, revoked and expired tokens are indistinguishable
        to the caller.
        """
        if not token:
            raise UnauthorizedError()

        session = self._sessions.find_by_token(token)
        if session is None:
            raise UnauthorizedError("Invalid or expired session token")

        # Role is read from the user row so role changes apply immediately
        user = self._users.find_by_id(session.user_id)
        if user is None:
            logger.warning("Session %s references a missing user", session.id)
            raise UnauthorizedError("Invalid or expired session token")

        return SecurityContext(user_id=user.id, role=user.role, token=token)
