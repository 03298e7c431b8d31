# File: availability/processors/interval_validator.py
"""
Interval validation.
Runs on every create and on every update after partial fields are merged,
before anything reaches the store.
"""

import datetime
from typing import List, Optional

from availability.core.exceptions import InvalidInterval
from availability.models import Interval, ValidationError
from availability.utils.logger import setup_logger

logger = setup_logger(__name__)


class IntervalValidator:
    """Checks candidate intervals against the interval invariants."""

    def collect_errors(self, interval: Interval, now: datetime.datetime) -> List[ValidationError]:
        """
        Return every rule the interval breaks, in check order.

        Args:
            interval: Candidate interval (partial fields already merged)
            now: Validation-time instant; intervals may not start before it

        Returns:
            List of ValidationError records, empty when valid
        """
        errors: List[ValidationError] = []

        if not interval.is_valid_time_range():
            errors.append(ValidationError(
                'start', "Start time must be before end time", interval.id
            ))
            # The remaining checks need a usable range
            return errors

        if interval.is_all_day and not interval.is_valid_all_day():
            errors.append(ValidationError(
                'is_all_day', "All day events must be full days", interval.id
            ))

        if interval.start < now:
            errors.append(ValidationError(
                'start', "Cannot create events in the past", interval.id
            ))

        minutes: Optional[int] = interval.reminder_offset_minutes
        if minutes is not None and minutes < 0:
            errors.append(ValidationError(
                'reminder_offset_minutes', "Reminder cannot be negative", interval.id
            ))

        return errors

    def validate(self, interval: Interval, now: datetime.datetime) -> None:
        """
        Raise InvalidInterval for the first broken rule.

        Raises:
            InvalidInterval: If the interval is not acceptable for storage
        """
        logger.debug(f"Validating interval: {interval.title}")

        errors = self.collect_errors(interval, now)
        if errors:
            logger.warning(f"Interval rejected - {errors[0]}")
            raise InvalidInterval(errors[0])

        logger.debug("Interval validation passed")
