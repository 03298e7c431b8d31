# File: availability/services/service_factory.py

from typing import Optional, Tuple

from availability.core.config_manager import Config
from availability.services.database import Database
from availability.services.interval_store import SQLiteIntervalStore
from availability.services.user_directory import SQLiteUserDirectory
from availability.utils.clock import Clock, local_now
from availability.utils.logger import setup_logger

logger = setup_logger(__name__)


class ServiceFactory:
    """Factory for creating storage adapter instances."""

    @staticmethod
    def create_database(db_path: Optional[str] = None) -> Database:
        """
        Open the SQLite database and make sure the schema exists.

        Args:
            db_path: Database file or ":memory:" (default: Config.DB_PATH)

        Returns:
            Database instance
        """
        db_path = str(db_path or Config.DB_PATH)
        Config.ensure_directories(db_path)

        database = Database(db_path)
        database.init_schema()
        return database

    @staticmethod
    def create_services(
        db_path: Optional[str] = None,
        clock: Clock = local_now,
    ) -> Tuple[SQLiteIntervalStore, SQLiteUserDirectory]:
        """
        Create the interval store and user directory over one database.

        Args:
            db_path: Database file or ":memory:" (default: Config.DB_PATH)
            clock: Clock used for created_at/updated_at stamps

        Returns:
            Tuple of (interval_store, user_directory)
        """
        database = ServiceFactory.create_database(db_path)
        logger.debug(f"Storage services created on {database.db_path}")
        return (
            SQLiteIntervalStore(database, clock=clock),
            SQLiteUserDirectory(database),
        )
