"""Password hashing with bcrypt."""

import logging
from functools import lru_cache

import bcrypt

from app.config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _dummy_hash_for_cost(rounds: int) -> str:
    return bcrypt.hashpw(b"dummy-password", bcrypt.gensalt(rounds=rounds)).decode("utf-8")


class PasswordService:
    """Slow adaptive hashing for stored credentials."""

    @staticmethod
    def get_dummy_hash() -> str:
        """Get a dummy password hash for timing-consistent verification.

        Used when the user doesn't exist to prevent email enumeration via
        timing attacks, so it is built at the same cost as real hashes.
        """
        return _dummy_hash_for_cost(settings.bcrypt_rounds)

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
        hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        """Verify a password against its hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False
