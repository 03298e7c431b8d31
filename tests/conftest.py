# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides an in-memory database, a fixed clock and interval factories.
"""

import os
import sys
from datetime import datetime
from pathlib import Path

import pytest

# Keep test runs from writing log files
os.environ.setdefault("LOG_TO_FILE", "false")

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from availability.core.engine import AvailabilityEngine
from availability.models import Interval, IntervalSource
from availability.services.database import Database
from availability.services.interval_store import SQLiteIntervalStore
from availability.services.user_directory import SQLiteUserDirectory


# A fixed "now" so past/future rules are deterministic
FIXED_NOW = datetime(2030, 6, 1, 12, 0, 0)


# ==================== Clock Fixtures ====================

@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def fixed_clock(now):
    """Clock callable that always returns FIXED_NOW."""
    return lambda: now


# ==================== Storage Fixtures ====================

@pytest.fixture
def database():
    """In-memory SQLite database with the schema applied."""
    db = Database(":memory:")
    db.init_schema()
    yield db
    db.close()


@pytest.fixture
def store(database, fixed_clock):
    return SQLiteIntervalStore(database, clock=fixed_clock)


@pytest.fixture
def users(database):
    return SQLiteUserDirectory(database)


@pytest.fixture
def owner(users):
    """A registered user."""
    return users.add_user("Alice", "alice@example.com")


@pytest.fixture
def engine(store, users, fixed_clock):
    return AvailabilityEngine(store, users, clock=fixed_clock)


# ==================== Interval Fixtures ====================

@pytest.fixture
def make_interval():
    """Factory fixture for creating unsaved intervals."""
    def _create(
        start: datetime,
        end: datetime,
        owner_id: int = 1,
        is_busy: bool = True,
        title: str = "Test Event",
        **extra
    ) -> Interval:
        return Interval(
            owner_id=owner_id,
            start=start,
            end=end,
            is_busy=is_busy,
            title=title,
            source=extra.pop('source', IntervalSource.MANUAL),
            **extra
        )

    return _create


@pytest.fixture
def seed(store, make_interval):
    """Insert intervals straight into the store, bypassing validation."""
    def _seed(start: datetime, end: datetime, **kwargs) -> Interval:
        return store.insert(make_interval(start, end, **kwargs))

    return _seed


# ==================== Helper Fixtures ====================

@pytest.fixture
def assert_covers_window():
    """Assert a merged view covers [start, end) with no gaps."""
    def _assert(view, window_start: datetime, window_end: datetime):
        cursor = window_start
        for interval in view:
            assert interval.start < interval.end, "Interval must have positive length"
            assert interval.start <= cursor, f"Gap before {interval}"
            cursor = max(cursor, interval.end)
        assert cursor >= window_end, "View stops before the window ends"

    return _assert


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
