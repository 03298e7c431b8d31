# File: availability/services/user_directory.py

from abc import ABC, abstractmethod
from typing import Optional

from availability.models import User
from availability.services.database import Database
from availability.utils.logger import LoggerMixin


class UserDirectory(ABC):
    """Resolves owner ids to user records."""

    @abstractmethod
    def get_user(self, owner_id: int) -> Optional[User]:
        pass

    def exists(self, owner_id: int) -> bool:
        return self.get_user(owner_id) is not None

    def get_display_name(self, owner_id: int) -> Optional[str]:
        user = self.get_user(owner_id)
        return user.display_name if user else None


class SQLiteUserDirectory(UserDirectory, LoggerMixin):
    """User directory reading the users table of the shared database."""

    def __init__(self, database: Database):
        self.db = database

    def get_user(self, owner_id: int) -> Optional[User]:
        row = self.db.query_one(
            "SELECT id, display_name, email FROM users WHERE id = ?", (owner_id,)
        )
        if not row:
            self.logger.debug(f"No user with id {owner_id}")
            return None
        return User(id=row['id'], display_name=row['display_name'], email=row['email'])

    def add_user(self, display_name: str, email: Optional[str] = None) -> User:
        """Register a user. Used by the setup script and tests."""
        cursor = self.db.execute(
            "INSERT INTO users (display_name, email) VALUES (?, ?)",
            (display_name, email),
        )
        self.logger.info(f"Registered user {cursor.lastrowid}: {display_name}")
        return User(id=cursor.lastrowid, display_name=display_name, email=email)
