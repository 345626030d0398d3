"""Repository layer - data access abstraction.

Repositories handle all database queries, providing a clean interface
for services. Services should use repositories for data access rather
than directly querying SQLAlchemy models.

Every repository wraps an injected SQLAlchemy session; none of them hold
state of their own, so tests can hand them any session they like.

Dependency direction: Services -> Repositories -> Models
"""

from .password_reset_token_repository import PasswordResetTokenRepository
from .session_repository import SessionRepository
from .user_repository import UserRepository
from .verification_token_repository import VerificationTokenRepository

__all__ = [
    "PasswordResetTokenRepository",
    "SessionRepository",
    "UserRepository",
    "VerificationTokenRepository",
]
