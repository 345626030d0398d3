"""Profile settings for the signed-in user."""

import logging

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from app.models.user import User
from app.services.repositories import UserRepository

logger = logging.getLogger(__name__)


class SettingsService:
    """Read and update the caller's own profile."""

    def __init__(self, db: Session) -> None:
        self._db = db
        self._users = UserRepository(db)

    def get_profile(self, user_id: str) -> User:
        user = self._users.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: str, name: str) -> User:
        user = self.get_profile(user_id)
        user.name = name.strip()
        self._db.commit()
        logger.info("Profile updated for user: %s", user_id)
        return user
