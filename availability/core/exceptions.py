# File: availability/core/exceptions.py
"""
Error taxonomy for the availability engine.

Missing intervals are not errors: reads return None and update/delete
report a miss. Conflicts are not errors either; they travel back inside
a successful WriteResult.
"""

from typing import Optional

from availability.models.api import ValidationError


class AvailabilityError(Exception):
    """Base class for engine errors."""


class InvalidInterval(AvailabilityError, ValueError):
    """A candidate interval failed validation."""

    def __init__(self, error: ValidationError):
        super().__init__(error.message)
        self.error = error

    @property
    def field(self) -> str:
        return self.error.field


class OwnerNotFound(AvailabilityError, LookupError):
    """The user directory cannot resolve the interval owner."""

    def __init__(self, owner_id: int, message: Optional[str] = None):
        super().__init__(message or f"User not found with id {owner_id}")
        self.owner_id = owner_id


class SynthesizedIntervalError(AvailabilityError, ValueError):
    """Implied free time was handed to a store."""
