"""Expiry helpers shared by session and single-use token models."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC (SQLite drops tzinfo on the way back)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class ExpiringMixin:
    """Adds `is_expired` to models with an `expires_at` column."""

    def is_expired(self, now: datetime | None = None) -> bool:
        """A row is valid strictly before `expires_at`."""
        return (now or utcnow()) >= as_utc(self.expires_at)
