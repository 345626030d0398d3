"""Delete expired sessions and single-use tokens.

Reads already ignore expired rows; this only reclaims space. Safe to run
from cron at any interval.
"""

import logging
from datetime import datetime

from sqlalchemy.orm import Session as DBSession

from app.models.expiring import utcnow
from app.services.repositories import (
    PasswordResetTokenRepository,
    SessionRepository,
    VerificationTokenRepository,
)

logger = logging.getLogger(__name__)


def purge_expired_tokens(db: DBSession, now: datetime | None = None) -> dict[str, int]:
    """
    Remove every session and token whose expiry has passed.

    Args:
        db: Database session
        now: Cut-off time. Defaults to the current UTC time.

    Returns:
        Number of deleted rows per table
    """
    now = now or utcnow()
    counts = {
        "sessions": SessionRepository(db).delete_expired(now),
        "email_verification_tokens": VerificationTokenRepository(db).delete_expired(now),
        "password_reset_tokens": PasswordResetTokenRepository(db).delete_expired(now),
    }
    db.commit()

    for table, count in counts.items():
        logger.info("Purged %d expired row(s) from %s", count, table)
    return counts


if __name__ == "__main__":
    """Run as standalone script."""
    logging.basicConfig(level=logging.INFO, format="%(message)s")

    from app.database import SessionLocal

    db = SessionLocal()
    try:
        purge_expired_tokens(db)
    except Exception:
        logger.exception("Purge failed")
        db.rollback()
        raise
    finally:
        db.close()
