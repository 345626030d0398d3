"""Application constants to avoid magic strings."""


class UserRole:
    """User role constants."""

    USER = "USER"
    ADMIN = "ADMIN"


class NotificationKind:
    """Kinds of outbound notifications handed to the email sink."""

    VERIFICATION = "verification"
    PASSWORD_RESET = "password_reset"
    WELCOME = "welcome"
    PASSWORD_CHANGED = "password_changed"
