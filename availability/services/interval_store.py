# File: availability/services/interval_store.py
"""
Durable storage for intervals.

IntervalStore is the contract the engine consumes; SQLiteIntervalStore is
the shipped adapter. Every read returns intervals ordered by start, with
ties kept in insertion order.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from availability.core.exceptions import SynthesizedIntervalError
from availability.models import Interval, IntervalSource, UPDATABLE_FIELDS, DEFAULT_TIMEZONE_LABEL
from availability.services.database import Database, to_db_time, from_db_time
from availability.utils.clock import Clock, local_now
from availability.utils.logger import setup_logger

logger = setup_logger(__name__)


class IntervalStore(ABC):
    """Storage contract for interval records."""

    @abstractmethod
    def insert(self, interval: Interval) -> Interval:
        """Persist a new interval; assigns id, created_at and updated_at."""

    @abstractmethod
    def update(self, interval_id: int, fields: Dict[str, Any]) -> Optional[Interval]:
        """Overwrite the given fields; None when the id is absent."""

    @abstractmethod
    def delete_by_id(self, interval_id: int) -> bool:
        """False when the id is absent."""

    @abstractmethod
    def find_by_id(self, interval_id: int) -> Optional[Interval]:
        pass

    @abstractmethod
    def find_all_for_owner(self, owner_id: int) -> List[Interval]:
        pass

    @abstractmethod
    def find_overlapping(
        self,
        owner_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> List[Interval]:
        """Strict overlap with [start, end): touching endpoints do not match."""

    @abstractmethod
    def find_in_range(self, owner_id: int, start: datetime, end: datetime) -> List[Interval]:
        """Boundary-inclusive overlap: e.start <= end and e.end >= start."""

    @abstractmethod
    def find_starting_after(self, owner_id: int, instant: datetime) -> List[Interval]:
        pass

    @abstractmethod
    def find_containing(self, owner_id: int, instant: datetime) -> List[Interval]:
        """Intervals with start <= instant <= end."""

    @abstractmethod
    def count_for_owner(self, owner_id: int, is_busy: Optional[bool] = None) -> int:
        """Total count, or only busy/free ones when is_busy is given."""

    @abstractmethod
    def exists_starting_between(self, owner_id: int, start: datetime, end: datetime) -> bool:
        pass


# attribute name -> column name
_COLUMNS = {
    'start': 'start_time',
    'end': 'end_time',
    'timezone_label': 'timezone',
    'title': 'title',
    'description': 'description',
    'location': 'location',
    'is_busy': 'is_busy',
    'is_all_day': 'is_all_day',
    'reminder_offset_minutes': 'reminder_minutes',
}

_SELECT = "SELECT * FROM intervals"
_ORDER = "ORDER BY start_time, id"


def _to_column_value(name: str, value: Any) -> Any:
    if name == 'timezone_label' and (not value or not value.strip()):
        return DEFAULT_TIMEZONE_LABEL
    if name in ('start', 'end'):
        return to_db_time(value)
    if name in ('is_busy', 'is_all_day'):
        return int(bool(value))
    return value


def _row_to_interval(row) -> Interval:
    return Interval(
        id=row['id'],
        owner_id=row['owner_id'],
        start=from_db_time(row['start_time']),
        end=from_db_time(row['end_time']),
        timezone_label=row['timezone'],
        source=IntervalSource(row['source']),
        external_event_id=row['external_event_id'],
        is_busy=bool(row['is_busy']),
        is_all_day=bool(row['is_all_day']),
        title=row['title'],
        description=row['description'],
        location=row['location'],
        reminder_offset_minutes=row['reminder_minutes'],
        created_at=from_db_time(row['created_at']),
        updated_at=from_db_time(row['updated_at']),
    )


class SQLiteIntervalStore(IntervalStore):
    """IntervalStore backed by the shared SQLite database."""

    def __init__(self, database: Database, clock: Clock = local_now):
        self.db = database
        self.clock = clock

    def insert(self, interval: Interval) -> Interval:
        if interval.synthesized:
            raise SynthesizedIntervalError("Implied free time cannot be persisted")

        now = self.clock()
        cursor = self.db.execute(
            """
            INSERT INTO intervals (
                owner_id, start_time, end_time, timezone, source, external_event_id,
                is_busy, is_all_day, title, description, location, reminder_minutes,
                created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                interval.owner_id,
                to_db_time(interval.start),
                to_db_time(interval.end),
                interval.timezone_label,
                interval.source.value,
                interval.external_event_id,
                int(interval.is_busy),
                int(interval.is_all_day),
                interval.title,
                interval.description,
                interval.location,
                interval.reminder_offset_minutes,
                to_db_time(now),
                to_db_time(now),
            ),
        )
        logger.debug(f"Inserted interval {cursor.lastrowid} for owner {interval.owner_id}")
        return interval.with_changes(id=cursor.lastrowid, created_at=now, updated_at=now)

    def update(self, interval_id: int, fields: Dict[str, Any]) -> Optional[Interval]:
        changes = {
            name: value for name, value in fields.items()
            if name in UPDATABLE_FIELDS
        }
        assignments = [f"{_COLUMNS[name]} = ?" for name in changes]
        params = [_to_column_value(name, value) for name, value in changes.items()]

        assignments.append("updated_at = ?")
        params.append(to_db_time(self.clock()))
        params.append(interval_id)

        cursor = self.db.execute(
            f"UPDATE intervals SET {', '.join(assignments)} WHERE id = ?",
            params,
        )
        if cursor.rowcount == 0:
            return None
        return self.find_by_id(interval_id)

    def delete_by_id(self, interval_id: int) -> bool:
        cursor = self.db.execute("DELETE FROM intervals WHERE id = ?", (interval_id,))
        return cursor.rowcount > 0

    def find_by_id(self, interval_id: int) -> Optional[Interval]:
        row = self.db.query_one(f"{_SELECT} WHERE id = ?", (interval_id,))
        return _row_to_interval(row) if row else None

    def find_all_for_owner(self, owner_id: int) -> List[Interval]:
        rows = self.db.query(f"{_SELECT} WHERE owner_id = ? {_ORDER}", (owner_id,))
        return [_row_to_interval(r) for r in rows]

    def find_overlapping(
        self,
        owner_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> List[Interval]:
        sql = f"{_SELECT} WHERE owner_id = ? AND start_time < ? AND end_time > ?"
        params: List[Any] = [owner_id, to_db_time(end), to_db_time(start)]
        if exclude_id is not None:
            sql += " AND id != ?"
            params.append(exclude_id)
        rows = self.db.query(f"{sql} {_ORDER}", params)
        return [_row_to_interval(r) for r in rows]

    def find_in_range(self, owner_id: int, start: datetime, end: datetime) -> List[Interval]:
        rows = self.db.query(
            f"{_SELECT} WHERE owner_id = ? AND start_time <= ? AND end_time >= ? {_ORDER}",
            (owner_id, to_db_time(end), to_db_time(start)),
        )
        return [_row_to_interval(r) for r in rows]

    def find_starting_after(self, owner_id: int, instant: datetime) -> List[Interval]:
        rows = self.db.query(
            f"{_SELECT} WHERE owner_id = ? AND start_time > ? {_ORDER}",
            (owner_id, to_db_time(instant)),
        )
        return [_row_to_interval(r) for r in rows]

    def find_containing(self, owner_id: int, instant: datetime) -> List[Interval]:
        moment = to_db_time(instant)
        rows = self.db.query(
            f"{_SELECT} WHERE owner_id = ? AND start_time <= ? AND end_time >= ? {_ORDER}",
            (owner_id, moment, moment),
        )
        return [_row_to_interval(r) for r in rows]

    def count_for_owner(self, owner_id: int, is_busy: Optional[bool] = None) -> int:
        if is_busy is None:
            row = self.db.query_one(
                "SELECT COUNT(*) FROM intervals WHERE owner_id = ?", (owner_id,)
            )
        else:
            row = self.db.query_one(
                "SELECT COUNT(*) FROM intervals WHERE owner_id = ? AND is_busy = ?",
                (owner_id, int(is_busy)),
            )
        return int(row[0])

    def exists_starting_between(self, owner_id: int, start: datetime, end: datetime) -> bool:
        row = self.db.query_one(
            "SELECT 1 FROM intervals WHERE owner_id = ? AND start_time BETWEEN ? AND ? LIMIT 1",
            (owner_id, to_db_time(start), to_db_time(end)),
        )
        return row is not None
