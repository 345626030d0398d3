"""Session data access layer (session store)."""

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session as DBSession

from app.models.expiring import utcnow
from app.models.session import Session
from app.services.token_service import hash_token

logger = logging.getLogger(__name__)


class SessionRepository:
    """Persistence for login sessions keyed by token digest.

    Reads never return an expired row, whether or not the sweep has
    removed it yet. Bulk deletes are single statements so each revocation
    is atomic on its own.
    """

    def __init__(self, db: DBSession) -> None:
        self._db = db

    def create(self, user_id: str, token: str, ttl: timedelta) -> Session:
        """Persist a session for `token` expiring `ttl` from now."""
        session = Session(
            user_id=user_id,
            token_hash=hash_token(token),
            expires_at=utcnow() + ttl,
        )
        self._db.add(session)
        self._db.flush()
        return session

    def find_by_token(self, token: str, now: datetime | None = None) -> Session | None:
        """Return the live session for `token`, or None if unknown or expired."""
        return (
            self._db.query(Session)
            .filter(
                Session.token_hash == hash_token(token),
                Session.expires_at > (now or utcnow()),
            )
            .first()
        )

    def delete_by_token(self, token: str) -> int:
        return (
            self._db.query(Session)
            .filter(Session.token_hash == hash_token(token))
            .delete(synchronize_session=False)
        )

    def delete_all_for_user(self, user_id: str) -> int:
        return (
            self._db.query(Session)
            .filter(Session.user_id == user_id)
            .delete(synchronize_session=False)
        )

    def delete_all_for_user_except(self, user_id: str, token: str) -> int:
        """Revoke every session of the user except the one holding `token`."""
        return (
            self._db.query(Session)
            .filter(Session.user_id == user_id, Session.token_hash != hash_token(token))
            .delete(synchronize_session=False)
        )

    def delete_expired(self, now: datetime | None = None) -> int:
        return (
            self._db.query(Session)
            .filter(Session.expires_at <= (now or utcnow()))
            .delete(synchronize_session=False)
        )

    def count_for_user(self, user_id: str, now: datetime | None = None) -> int:
        """Number of live sessions for a user."""
        return (
            self._db.query(Session)
            .filter(Session.user_id == user_id, Session.expires_at > (now or utcnow()))
            .count()
        )
