"""Email verification token data access layer."""

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.models.email_verification_token import EmailVerificationToken
from app.models.expiring import utcnow
from app.services.token_service import hash_token


class VerificationTokenRepository:
    """Single-use email verification tokens.

    Unlike sessions, lookups return expired and consumed rows too; the
    caller needs to tell "unknown" from "expired" from "already used".
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def create(self, user_id: str, token: str, ttl: timedelta) -> EmailVerificationToken:
        record = EmailVerificationToken(
            user_id=user_id,
            token_hash=hash_token(token),
            expires_at=utcnow() + ttl,
            consumed=False,
        )
        self._db.add(record)
        self._db.flush()
        return record

    def find_by_token(self, token: str) -> EmailVerificationToken | None:
        return (
            self._db.query(EmailVerificationToken)
            .filter(EmailVerificationToken.token_hash == hash_token(token))
            .first()
        )

    def mark_consumed(self, record: EmailVerificationToken) -> bool:
        """Flip `consumed` only if still unconsumed; False when another request won."""
        updated = (
            self._db.query(EmailVerificationToken)
            .filter(
                EmailVerificationToken.id == record.id,
                EmailVerificationToken.consumed.is_(False),
            )
            .update({EmailVerificationToken.consumed: True}, synchronize_session=False)
        )
        record.consumed = True
        return updated == 1

    def delete_unconsumed_for_user(self, user_id: str) -> int:
        return (
            self._db.query(EmailVerificationToken)
            .filter(
                EmailVerificationToken.user_id == user_id,
                EmailVerificationToken.consumed.is_(False),
            )
            .delete(synchronize_session=False)
        )

    def delete_all_for_user(self, user_id: str) -> int:
        return (
            self._db.query(EmailVerificationToken)
            .filter(EmailVerificationToken.user_id == user_id)
            .delete(synchronize_session=False)
        )

    def delete_expired(self, now: datetime | None = None) -> int:
        return (
            self._db.query(EmailVerificationToken)
            .filter(EmailVerificationToken.expires_at <= (now or utcnow()))
            .delete(synchronize_session=False)
        )
