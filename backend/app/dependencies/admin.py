"""Admin authentication dependency."""

from fastapi import Depends

from app.dependencies.auth import get_security_context
from app.exceptions import ForbiddenError
from app.services.security_context import SecurityContext


def get_admin_context(context: SecurityContext = Depends(get_security_context)) -> SecurityContext:
    """Require admin privileges.

    Args:
        context: The authenticated caller from get_security_context.

    Returns:
        The context if the caller is an admin.

    Raises:
        ForbiddenError: If the caller is not an admin.
    """
    if not context.is_admin:
        raise ForbiddenError("Admin access required")
    return context
