# File: availability/core/config_manager.py
"""
Centralized configuration management for the availability engine.
Loads settings from environment variables and the project's .env file.
"""

import os
import logging
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

import pytz
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ['yes', 'true', '1', 'on', 'y', 't']


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from availability/core/

    # Subdirectories
    DATA_DIR = BASE_DIR / "data"
    LOGS_DIR = Path(os.getenv("LOGS_DIR", str(BASE_DIR / "logs")))

    # Files
    ENV_FILE = BASE_DIR / ".env"
    DB_PATH = os.getenv("AVAILABILITY_DB", str(DATA_DIR / "availability.db"))

    # Logging
    LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    LOG_TO_FILE = _env_flag("LOG_TO_FILE", True)

    # Clock: "today" and "now" are read as wall time in this zone
    TARGET_TIMEZONE = os.getenv("TIMEZONE", "UTC")

    # Interval defaults
    DEFAULT_TIMEZONE_LABEL = "UTC"
    DEFAULT_REMINDER_MINUTES = int(os.getenv("DEFAULT_REMINDER_MINUTES", "30"))

    # Implied free time labels
    FREE_TIME_TITLE = "Available"
    FREE_TIME_DESCRIPTION = "Implied free time"

    # Month view historically ends one second before the next month starts,
    # so an interval beginning in the month's last second is not matched.
    # Turning this off narrows the gap to the datetime resolution.
    PRESERVE_MONTH_END_TRUNCATION = _env_flag("PRESERVE_MONTH_END_TRUNCATION", True)
    LEGACY_MONTH_END_TRUNCATION = timedelta(seconds=1)
    EXACT_MONTH_END_TRUNCATION = timedelta(microseconds=1)

    @classmethod
    def month_end_truncation(cls) -> timedelta:
        """Offset subtracted from the next month's start to get the month view's end."""
        if cls.PRESERVE_MONTH_END_TRUNCATION:
            return cls.LEGACY_MONTH_END_TRUNCATION
        return cls.EXACT_MONTH_END_TRUNCATION

    @classmethod
    def ensure_directories(cls, db_path: Optional[str] = None) -> None:
        """Create the parent directory of a file-backed database."""
        db_path = db_path or cls.DB_PATH
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    @classmethod
    def validate(cls) -> bool:
        """Validate that the configuration is usable."""
        errors: List[str] = []

        if cls.TARGET_TIMEZONE not in pytz.all_timezones_set:
            errors.append(f"Unknown TIMEZONE: {cls.TARGET_TIMEZONE}")

        if cls.DEFAULT_REMINDER_MINUTES < 0:
            errors.append("DEFAULT_REMINDER_MINUTES cannot be negative")

        if errors:
            logger = logging.getLogger(__name__)
            for error in errors:
                logger.error(f"Configuration Error: {error}")
            return False

        return True
