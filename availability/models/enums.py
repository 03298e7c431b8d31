# File: availability/models/enums.py

from enum import Enum


class IntervalSource(Enum):
    """Where an interval came from."""
    MANUAL = "MANUAL"                    # Entered by the user
    GOOGLE_CALENDAR = "GOOGLE_CALENDAR"  # Import label only, no sync
    OVERRIDE = "OVERRIDE"                # Manual override of an import
    RECURRING = "RECURRING"              # Pattern placeholder, never expanded

    @property
    def display_name(self) -> str:
        return SOURCE_DISPLAY_NAMES[self]

    @property
    def priority(self) -> int:
        """Higher wins when sources disagree about the same slot."""
        return SOURCE_PRIORITIES[self]

    def is_editable(self) -> bool:
        return self is not IntervalSource.GOOGLE_CALENDAR

    def is_manual(self) -> bool:
        return self in (IntervalSource.MANUAL, IntervalSource.OVERRIDE)

    def is_imported(self) -> bool:
        return self is IntervalSource.GOOGLE_CALENDAR

    def is_currently_supported(self) -> bool:
        return self is IntervalSource.MANUAL

    def __str__(self) -> str:
        return self.display_name


SOURCE_DISPLAY_NAMES = {
    IntervalSource.MANUAL: "Manual Entry",
    IntervalSource.GOOGLE_CALENDAR: "Google Calendar",
    IntervalSource.OVERRIDE: "Manual Override",
    IntervalSource.RECURRING: "Recurring Pattern",
}

SOURCE_PRIORITIES = {
    IntervalSource.OVERRIDE: 4,
    IntervalSource.MANUAL: 3,
    IntervalSource.GOOGLE_CALENDAR: 2,
    IntervalSource.RECURRING: 1,
}
