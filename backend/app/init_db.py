"""Database initialization script with an optional bootstrap admin."""

import logging

from sqlalchemy.orm import Session

from app.config import settings
from app.constants import UserRole
from app.database import Base, SessionLocal, engine
from app.models import User
from app.services.password_service import PasswordService
from app.services.repositories import UserRepository
from app.services.repositories.user_repository import normalize_email

logger = logging.getLogger(__name__)


def create_tables():
    """Create all database tables."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully!")


def create_initial_admin(db: Session, email: str, password: str) -> User | None:
    """Create a verified ADMIN account unless the email is already taken.

    Returns the new user, or None when nothing was created.
    """
    users = UserRepository(db)
    existing = users.find_by_email(email)
    if existing is not None:
        logger.info("Initial admin %s already exists (role=%s)", existing.email, existing.role)
        return None

    user = User(
        email=normalize_email(email),
        password_hash=PasswordService.hash_password(password),
        name="Administrator",
        role=UserRole.ADMIN,
        email_verified=True,
    )
    users.save(user)
    db.commit()
    logger.info("Created initial admin: %s (id: %s)", user.email, user.id)
    return user


def init_db():
    """Initialize database tables and the bootstrap admin."""
    logger.info("Initializing database...")
    create_tables()

    if not (settings.initial_admin_email and settings.initial_admin_password):
        logger.info("INITIAL_ADMIN_EMAIL/INITIAL_ADMIN_PASSWORD not set. Skipping admin bootstrap.")
        return

    db = SessionLocal()
    try:
        create_initial_admin(db, settings.initial_admin_email, settings.initial_admin_password)
        logger.info("Database initialization complete!")
    except Exception:
        logger.exception("Error during database initialization")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    init_db()
