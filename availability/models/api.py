# File: availability/models/api.py
"""
Result models returned by the availability engine.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from .interval import Interval


@dataclass
class WriteResult:
    """A stored interval plus any advisory conflicts found while writing it."""
    interval: Interval
    conflicts: List[Interval] = field(default_factory=list)

    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def to_dict(self) -> dict:
        return {
            'interval': self.interval.to_dict(),
            'conflicts': [c.to_dict() for c in self.conflicts],
        }


@dataclass
class AvailabilityStatistics:
    """Interval counts for one owner, no time filter."""
    total: int
    free: int
    busy: int

    def to_dict(self) -> dict:
        return {
            'totalEvents': self.total,
            'freeTimeSlots': self.free,
            'busyTimeSlots': self.busy,
        }


@dataclass
class ValidationError:
    """Represents a validation error."""
    field: str
    message: str
    interval_id: Optional[int] = None

    def __str__(self) -> str:
        """String representation of error."""
        if self.interval_id is not None:
            return f"Interval {self.interval_id} - {self.field}: {self.message}"
        return f"{self.field}: {self.message}"
