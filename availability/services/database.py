# File: availability/services/database.py

import sqlite3
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from availability.utils.logger import setup_logger

logger = setup_logger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    display_name TEXT NOT NULL,
    email TEXT
);

CREATE TABLE IF NOT EXISTS intervals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    owner_id INTEGER NOT NULL,
    start_time TEXT NOT NULL,
    end_time TEXT NOT NULL,
    timezone TEXT NOT NULL DEFAULT 'UTC',
    source TEXT NOT NULL DEFAULT 'MANUAL',
    external_event_id TEXT,
    is_busy INTEGER NOT NULL DEFAULT 0,
    is_all_day INTEGER NOT NULL DEFAULT 0,
    title TEXT,
    description TEXT,
    location TEXT,
    reminder_minutes INTEGER,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_interval_owner_id ON intervals (owner_id);
CREATE INDEX IF NOT EXISTS idx_interval_start_time ON intervals (start_time);
CREATE INDEX IF NOT EXISTS idx_interval_end_time ON intervals (end_time);
CREATE INDEX IF NOT EXISTS idx_interval_time_range ON intervals (start_time, end_time);
"""


def to_db_time(value: Optional[datetime]) -> Optional[str]:
    """Fixed-width ISO text so lexical order matches chronological order."""
    if value is None:
        return None
    return value.isoformat(sep=' ', timespec='microseconds')


def from_db_time(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)


class Database:
    """
    A single SQLite connection shared by the store and the user directory.

    Statements are serialized on one lock and each write commits on its own,
    so concurrent writers never interleave inside a statement.
    """

    def __init__(self, db_path: Union[str, Path] = ":memory:"):
        self.db_path = str(db_path)
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        logger.debug(f"Opened database at {self.db_path}")

    def init_schema(self) -> None:
        """Create tables and indexes if they do not exist."""
        with self._lock:
            self._conn.executescript(SCHEMA_SQL)
            self._conn.commit()
        logger.info(f"Database schema ready at {self.db_path}")

    def execute(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        """Run a write statement and commit it."""
        with self._lock, self._conn:
            return self._conn.execute(sql, tuple(params))

    def query(self, sql: str, params: Iterable[Any] = ()) -> List[sqlite3.Row]:
        with self._lock:
            return self._conn.execute(sql, tuple(params)).fetchall()

    def query_one(self, sql: str, params: Iterable[Any] = ()) -> Optional[sqlite3.Row]:
        with self._lock:
            return self._conn.execute(sql, tuple(params)).fetchone()

    def close(self) -> None:
        with self._lock:
            self._conn.close()
