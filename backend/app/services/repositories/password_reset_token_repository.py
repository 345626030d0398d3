"""Password reset token data access layer."""

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.models.expiring import utcnow
from app.models.password_reset_token import PasswordResetToken
from app.services.token_service import hash_token


class PasswordResetTokenRepository:
    """Single-use password reset tokens, at most one outstanding per user."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def create(self, user_id: str, token: str, ttl: timedelta) -> PasswordResetToken:
        record = PasswordResetToken(
            user_id=user_id,
            token_hash=hash_token(token),
            expires_at=utcnow() + ttl,
            consumed=False,
        )
        self._db.add(record)
        self._db.flush()
        return record

    def find_by_token(self, token: str) -> PasswordResetToken | None:
        return (
            self._db.query(PasswordResetToken)
            .filter(PasswordResetToken.token_hash == hash_token(token))
            .first()
        )

    def delete_unconsumed_for_user(self, user_id: str) -> int:
        return (
            self._db.query(PasswordResetToken)
            .filter(
                PasswordResetToken.user_id == user_id,
                PasswordResetToken.consumed.is_(False),
            )
            .delete(synchronize_session=False)
        )

    def delete_all_for_user(self, user_id: str) -> int:
        return (
            self._db.query(PasswordResetToken)
            .filter(PasswordResetToken.user_id == user_id)
            .delete(synchronize_session=False)
        )

    def delete_expired(self, now: datetime | None = None) -> int:
        return (
            self._db.query(PasswordResetToken)
            .filter(PasswordResetToken.expires_at <= (now or utcnow()))
            .delete(synchronize_session=False)
        )
