"""Domain exceptions raised by services and mapped to HTTP responses.

Each exception carries the HTTP status and the stable error kind that
`app.error_handlers` puts into the error response body.
"""

from fastapi import status


class AppError(Exception):
    """Base exception for domain errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    error: str = "BadRequest"
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None, details: list[dict] | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(AppError):
    """Input is well-formed but semantically invalid."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "ValidationError"
    default_message = "Validation failed"


class AuthenticationError(AppError):
    """Credentials did not match.

    The message is deliberately generic so it never reveals whether the
    email exists.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "AuthenticationError"
    default_message = "Invalid email or password"


class UnauthorizedError(AppError):
    """Bearer token missing, unknown, or expired."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"
    default_message = "Authentication token is missing or invalid"


class ForbiddenError(AppError):
    """Authenticated but not allowed."""

    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"
    default_message = "Access denied"


class NotFoundError(AppError):
    """Entity or token not found."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "NotFound"
    default_message = "Not found"


class ConflictError(AppError):
    """Entity already exists (unique constraint violation)."""

    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"
    default_message = "Already exists"


class ExpiredError(AppError):
    """Single-use token is past its expiry."""

    status_code = status.HTTP_410_GONE
    error = "Expired"
    default_message = "Token has expired"


class AlreadyUsedError(AppError):
    """Single-use token was already consumed."""

    status_code = status.HTTP_410_GONE
    error = "AlreadyUsed"
    default_message = "Token has already been used"
