"""Services layer - business logic and external integrations.

- auth_service: registration, login, logout, verification, password flows
- security_context: bearer token -> caller identity
- settings_service / admin_service: profile and user management
- token_service / password_service: token generation and password hashing
- email_service / notifications: outbound notification sink
- repositories/: Data access layer

Common imports for convenience:
    from app.services import SessionRepository, UserRepository
"""

# Re-export commonly used components for convenience
from app.services.repositories import (
    PasswordResetTokenRepository,
    SessionRepository,
    UserRepository,
    VerificationTokenRepository,
)

__all__ = [
    # Repositories
    "PasswordResetTokenRepository",
    "SessionRepository",
    "UserRepository",
    "VerificationTokenRepository",
]
