# File: availability/models/interval.py
"""
The central calendar entity: a time-bounded busy or free record owned by a user.
"""

from dataclasses import dataclass, replace, fields
from datetime import datetime, date, timedelta
from typing import Optional

from availability.utils.clock import local_now

from .enums import IntervalSource
from .common import parse_iso_datetime, format_iso_datetime, parse_bool

DEFAULT_TIMEZONE_LABEL = "UTC"

# Fields the store or engine assigns; never taken from client input.
ENGINE_ASSIGNED_FIELDS = ("id", "created_at", "updated_at")

# Fields a partial update may overwrite.
UPDATABLE_FIELDS = (
    "start",
    "end",
    "title",
    "description",
    "location",
    "is_busy",
    "is_all_day",
    "reminder_offset_minutes",
    "timezone_label",
)


@dataclass(frozen=True)
class Interval:
    """
    Immutable interval value.

    Stored intervals carry an ``id`` assigned by the store. Implied free time
    is tagged ``synthesized=True``, has no id, and is refused by every store.
    """
    owner_id: int
    start: Optional[datetime]
    end: Optional[datetime]
    id: Optional[int] = None
    timezone_label: str = DEFAULT_TIMEZONE_LABEL
    source: IntervalSource = IntervalSource.MANUAL
    is_busy: bool = False
    is_all_day: bool = False
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    reminder_offset_minutes: Optional[int] = None
    external_event_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    synthesized: bool = False

    def __post_init__(self):
        """Normalize loosely typed input."""
        if isinstance(self.source, str):
            object.__setattr__(self, "source", IntervalSource(self.source.split('.')[-1]))
        if not self.timezone_label or not self.timezone_label.strip():
            object.__setattr__(self, "timezone_label", DEFAULT_TIMEZONE_LABEL)

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def with_changes(self, **changes) -> "Interval":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def merged_with(self, partial: dict) -> "Interval":
        """Apply a partial update: only non-None updatable fields overwrite."""
        changes = {
            name: value for name, value in partial.items()
            if name in UPDATABLE_FIELDS and value is not None
        }
        return replace(self, **changes) if changes else self

    @classmethod
    def free_slot(
        cls,
        owner_id: int,
        start: datetime,
        end: datetime,
        title: str = "Available",
        description: str = "Implied free time",
    ) -> "Interval":
        """Build an implied free-time interval. Never persisted."""
        return cls(
            owner_id=owner_id,
            start=start,
            end=end,
            title=title,
            description=description,
            is_busy=False,
            is_all_day=False,
            source=IntervalSource.MANUAL,
            reminder_offset_minutes=None,
            synthesized=True,
        )

    # ------------------------------------------------------------------
    # Derived facts
    # ------------------------------------------------------------------

    @property
    def is_persisted(self) -> bool:
        return self.id is not None and not self.synthesized

    def is_valid_time_range(self) -> bool:
        return self.start is not None and self.end is not None and self.start < self.end

    def is_valid_all_day(self) -> bool:
        """All-day intervals run from 00:00 to 23:59 (possibly on different dates)."""
        if not self.is_all_day:
            return True
        return (
            self.start.hour == 0 and self.start.minute == 0
            and self.end.hour == 23 and self.end.minute == 59
        )

    def duration_minutes(self) -> int:
        """Whole minutes between start and end, 0 for an invalid range."""
        if not self.is_valid_time_range():
            return 0
        return int((self.end - self.start).total_seconds() // 60)

    def duration_hours(self) -> int:
        return self.duration_minutes() // 60

    def overlaps_with(self, other: "Interval") -> bool:
        """Strict overlap; intervals that only touch do not overlap."""
        if other is None or not self.is_valid_time_range() or not other.is_valid_time_range():
            return False
        return self.start < other.end and self.end > other.start

    def contains(self, instant: datetime) -> bool:
        """Inclusive on both ends."""
        return self.start <= instant <= self.end

    def is_in_past(self, now: Optional[datetime] = None) -> bool:
        now = now or local_now()
        return self.end is not None and self.end < now

    def is_today(self, today: Optional[date] = None) -> bool:
        return self.is_on_date(today or local_now().date())

    def is_multi_day(self) -> bool:
        return self.start.date() != self.end.date()

    def is_on_date(self, day: date) -> bool:
        return self.start.date() == day or self.end.date() == day

    @property
    def reminder_time(self) -> Optional[datetime]:
        if self.reminder_offset_minutes is None or self.start is None:
            return None
        return self.start - timedelta(minutes=self.reminder_offset_minutes)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            'id': self.id,
            'ownerId': self.owner_id,
            'start': format_iso_datetime(self.start),
            'end': format_iso_datetime(self.end),
            'timezoneLabel': self.timezone_label,
            'source': self.source.value,
            'isBusy': self.is_busy,
            'isAllDay': self.is_all_day,
            'title': self.title,
            'description': self.description,
            'location': self.location,
            'reminderOffsetMinutes': self.reminder_offset_minutes,
            'reminderTime': format_iso_datetime(self.reminder_time),
            'externalEventId': self.external_event_id,
            'createdAt': format_iso_datetime(self.created_at),
            'updatedAt': format_iso_datetime(self.updated_at),
            'synthesized': self.synthesized,
        }

    def content_key(self) -> tuple:
        """Every field except the engine-assigned ones."""
        return tuple(
            getattr(self, f.name) for f in fields(self)
            if f.name not in ENGINE_ASSIGNED_FIELDS
        )

    def __str__(self) -> str:
        kind = "busy" if self.is_busy else "free"
        return f"{self.title or 'Untitled'} [{self.start} - {self.end}] ({kind})"


# camelCase wire names -> attribute names
_WIRE_NAMES = {
    'ownerId': 'owner_id',
    'timezoneLabel': 'timezone_label',
    'timezone': 'timezone_label',
    'isBusy': 'is_busy',
    'isAllDay': 'is_all_day',
    'reminderOffsetMinutes': 'reminder_offset_minutes',
    'reminderMinutes': 'reminder_offset_minutes',
    'externalEventId': 'external_event_id',
    'startTime': 'start',
    'endTime': 'end',
}


def normalize_keys(data: dict) -> dict:
    """Map camelCase wire keys onto attribute names."""
    return {_WIRE_NAMES.get(key, key): value for key, value in data.items()}


def interval_from_dict(data: dict) -> Interval:
    """Create an Interval from a dictionary, accepting camelCase or snake_case keys."""
    data = normalize_keys(data)

    raw_minutes = data.get('reminder_offset_minutes')
    reminder = int(raw_minutes) if raw_minutes is not None else None

    return Interval(
        id=data.get('id'),
        owner_id=int(data['owner_id']),
        start=parse_iso_datetime(data.get('start')),
        end=parse_iso_datetime(data.get('end')),
        timezone_label=data.get('timezone_label') or DEFAULT_TIMEZONE_LABEL,
        source=data.get('source') or IntervalSource.MANUAL,
        is_busy=parse_bool(data.get('is_busy')),
        is_all_day=parse_bool(data.get('is_all_day')),
        title=data.get('title'),
        description=data.get('description'),
        location=data.get('location'),
        reminder_offset_minutes=reminder,
        external_event_id=data.get('external_event_id'),
        synthesized=parse_bool(data.get('synthesized')),
    )
