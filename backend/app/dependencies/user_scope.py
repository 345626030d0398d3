"""Helper functions for user-owned resources."""

from app.exceptions import ForbiddenError, NotFoundError
from app.services.security_context import SecurityContext


def ensure_owner(context: SecurityContext, owner_id: str | None) -> None:
    """
    Check that a resource owned by `owner_id` belongs to the caller.

    Summaries and quizzes are scoped to the user who uploaded the PDF;
    pass None when the resource does not exist.

    Raises:
        NotFoundError: If the resource does not exist.
        ForbiddenError: If it belongs to another user.
    """
    if owner_id is None:
        raise NotFoundError("Resource not found")
    if owner_id != context.user_id:
        raise ForbiddenError("You do not have access to this resource")
