# File: availability/core/engine.py
"""
Availability engine.
Coordinates validation, conflict detection and free-time synthesis on top of
the interval store and the user directory.

The engine holds no mutable state of its own: every call reads fresh from
the store, so results always reflect the latest committed writes.
"""

import datetime
from typing import List, Optional

from availability.core.config_manager import Config
from availability.core.exceptions import OwnerNotFound
from availability.models import (
    Interval,
    IntervalSource,
    UPDATABLE_FIELDS,
    WriteResult,
    AvailabilityStatistics,
)
from availability.processors.interval_validator import IntervalValidator
from availability.processors.conflict_detector import ConflictDetector
from availability.processors.free_time_synthesizer import FreeTimeSynthesizer
from availability.services.interval_store import IntervalStore
from availability.services.user_directory import UserDirectory
from availability.services.service_factory import ServiceFactory
from availability.utils.clock import Clock, local_now, day_bounds, month_bounds
from availability.utils.logger import setup_logger

logger = setup_logger(__name__)


class AvailabilityEngine:
    """
    Entry point for every calendar operation.

    Writes: create, update, delete.
    Reads: get-by-id, calendar/complete/month/today views, all, upcoming,
    current and statistics.
    """

    def __init__(
        self,
        store: IntervalStore,
        users: UserDirectory,
        clock: Clock = local_now,
        validator: Optional[IntervalValidator] = None,
        synthesizer: Optional[FreeTimeSynthesizer] = None,
    ):
        """
        Initialize the engine.

        Args:
            store: Interval store adapter
            users: User directory used to resolve owners
            clock: Returns the current naive wall time
            validator: Interval validator (default instance if omitted)
            synthesizer: Free-time synthesizer (default instance if omitted)
        """
        self.store = store
        self.users = users
        self.clock = clock
        self.validator = validator or IntervalValidator()
        self.conflict_detector = ConflictDetector(store)
        self.synthesizer = synthesizer or FreeTimeSynthesizer()

    # --------------------------------------------------------------------------
    # Writes
    # --------------------------------------------------------------------------

    def create_interval(
        self,
        owner_id: int,
        start: datetime.datetime,
        end: datetime.datetime,
        title: Optional[str] = None,
        description: Optional[str] = None,
        location: Optional[str] = None,
        is_busy: Optional[bool] = None,
        is_all_day: Optional[bool] = None,
        reminder_offset_minutes: Optional[int] = None,
        timezone_label: Optional[str] = None,
    ) -> WriteResult:
        """
        Validate and store a new manual interval.

        Returns:
            WriteResult with the stored interval and any busy conflicts

        Raises:
            OwnerNotFound: If the owner does not exist
            InvalidInterval: If the interval breaks a validation rule
        """
        logger.info(f"Creating interval for user {owner_id}: {title}")

        if not self.users.exists(owner_id):
            raise OwnerNotFound(owner_id)

        if reminder_offset_minutes is None:
            reminder_offset_minutes = Config.DEFAULT_REMINDER_MINUTES

        candidate = Interval(
            owner_id=owner_id,
            start=start,
            end=end,
            title=title,
            description=description,
            location=location,
            is_busy=bool(is_busy) if is_busy is not None else False,
            is_all_day=bool(is_all_day) if is_all_day is not None else False,
            reminder_offset_minutes=reminder_offset_minutes,
            timezone_label=timezone_label or Config.DEFAULT_TIMEZONE_LABEL,
            source=IntervalSource.MANUAL,
        )

        self.validator.validate(candidate, self.clock())

        conflicts = self.conflict_detector.find_conflicts(owner_id, start, end)
        self._report_conflicts(conflicts, "new interval")

        stored = self.store.insert(candidate)
        logger.info(f"Created interval {stored.id}: {stored}")
        return WriteResult(stored, conflicts)

    def update_interval(self, interval_id: int, **fields) -> Optional[WriteResult]:
        """
        Apply a partial update; only non-None fields overwrite.

        Args:
            interval_id: Interval to update
            **fields: Any of start, end, title, description, location,
                is_busy, is_all_day, reminder_offset_minutes, timezone_label

        Returns:
            WriteResult, or None if the interval does not exist

        Raises:
            InvalidInterval: If the merged interval breaks a validation rule
        """
        logger.info(f"Updating interval {interval_id}")

        unknown = sorted(set(fields) - set(UPDATABLE_FIELDS))
        if unknown:
            raise TypeError(f"Fields cannot be updated: {', '.join(unknown)}")

        existing = self.store.find_by_id(interval_id)
        if existing is None:
            logger.info(f"Interval not found with id {interval_id}")
            return None

        merged = existing.merged_with(fields)
        self.validator.validate(merged, self.clock())

        conflicts = self.conflict_detector.find_conflicts(
            merged.owner_id, merged.start, merged.end, exclude_id=interval_id
        )
        self._report_conflicts(conflicts, "updated interval")

        changes = {
            name: value for name, value in fields.items()
            if value is not None
        }
        updated = self.store.update(interval_id, changes)
        if updated is None:
            # Deleted between the read and the write
            logger.info(f"Interval {interval_id} disappeared during update")
            return None

        logger.info(f"Updated interval {updated.id}: {updated}")
        return WriteResult(updated, conflicts)

    def delete_interval(self, interval_id: int) -> bool:
        """Delete by id. Returns False if it did not exist."""
        deleted = self.store.delete_by_id(interval_id)
        if deleted:
            logger.info(f"Deleted interval with id {interval_id}")
        else:
            logger.info(f"Interval not found with id: {interval_id}")
        return deleted

    def get_interval(self, interval_id: int) -> Optional[Interval]:
        return self.store.find_by_id(interval_id)

    # --------------------------------------------------------------------------
    # Views
    # --------------------------------------------------------------------------

    def get_calendar_view(
        self,
        owner_id: int,
        start: datetime.datetime,
        end: datetime.datetime,
    ) -> List[Interval]:
        """Stored intervals touching [start, end], ordered by start."""
        self._check_window(start, end)
        logger.info(f"Getting calendar view for user {owner_id} from {start} to {end}")

        intervals = self.store.find_in_range(owner_id, start, end)
        logger.debug(f"Found {len(intervals)} stored availability records")
        return intervals

    def get_complete_calendar_view(
        self,
        owner_id: int,
        start: datetime.datetime,
        end: datetime.datetime,
    ) -> List[Interval]:
        """
        Stored intervals plus implied free time, chronologically merged.

        Raises:
            OwnerNotFound: If the owner cannot be resolved
        """
        self._check_window(start, end)
        logger.info(f"Getting complete calendar view with implied free time for user {owner_id}")

        owner_name = self.users.get_display_name(owner_id)
        if owner_name is None:
            raise OwnerNotFound(owner_id)

        stored = self.store.find_in_range(owner_id, start, end)
        free_time = self.synthesizer.synthesize(owner_id, start, end, stored, owner_name)

        complete_view = self.synthesizer.merge(stored, free_time)
        logger.info(
            f"Complete calendar view: {len(complete_view)} total slots "
            f"({len(stored)} stored, {len(free_time)} free)"
        )
        return complete_view

    def get_month_view(self, owner_id: int, year: int, month: int) -> List[Interval]:
        """
        Calendar view for one month.

        The window ends at the next month's start minus
        Config.month_end_truncation(); see PRESERVE_MONTH_END_TRUNCATION.
        """
        logger.info(f"Getting month view for user {owner_id} - {year}/{month}")

        month_start, month_end = month_bounds(year, month, Config.month_end_truncation())
        return self.get_calendar_view(owner_id, month_start, month_end)

    def get_today_view(self, owner_id: int) -> List[Interval]:
        """Calendar view from local midnight to 23:59:59 today."""
        logger.info(f"Getting today's availability for user {owner_id}")

        day_start, day_end = day_bounds(self.clock().date())
        return self.get_calendar_view(owner_id, day_start, day_end)

    def get_all_events(self, owner_id: int) -> List[Interval]:
        logger.info(f"Getting all availability for user {owner_id}")

        intervals = self.store.find_all_for_owner(owner_id)
        logger.debug(f"Found {len(intervals)} availability records for user {owner_id}")
        return intervals

    def get_upcoming_events(self, owner_id: int) -> List[Interval]:
        """Intervals starting strictly after now."""
        logger.info(f"Getting upcoming events for user {owner_id}")

        upcoming = self.store.find_starting_after(owner_id, self.clock())
        logger.debug(f"Found {len(upcoming)} upcoming events")
        return upcoming

    def get_current_events(self, owner_id: int) -> List[Interval]:
        """Intervals with start <= now <= end."""
        logger.info(f"Getting current events for user {owner_id}")

        current = self.store.find_containing(owner_id, self.clock())
        logger.debug(f"Found {len(current)} current events")
        return current

    def get_statistics(self, owner_id: int) -> AvailabilityStatistics:
        logger.info(f"Getting availability statistics for user {owner_id}")

        stats = AvailabilityStatistics(
            total=self.store.count_for_owner(owner_id),
            free=self.store.count_for_owner(owner_id, is_busy=False),
            busy=self.store.count_for_owner(owner_id, is_busy=True),
        )
        logger.debug(f"Availability statistics: {stats.to_dict()}")
        return stats

    def has_availability_in_range(
        self,
        owner_id: int,
        start: datetime.datetime,
        end: datetime.datetime,
    ) -> bool:
        """Whether any stored interval starts within [start, end]."""
        return self.store.exists_starting_between(owner_id, start, end)

    # --------------------------------------------------------------------------
    # Helpers
    # --------------------------------------------------------------------------

    @staticmethod
    def _check_window(start: datetime.datetime, end: datetime.datetime) -> None:
        if start is None or end is None:
            raise ValueError("Window start and end are required")
        if start > end:
            raise ValueError(f"Window start {start} is after window end {end}")

    @staticmethod
    def _report_conflicts(conflicts: List[Interval], subject: str) -> None:
        if not conflicts:
            return
        logger.warning(f"Found {len(conflicts)} potential conflicts for {subject}")
        for conflict in conflicts:
            logger.warning(f"Conflict: {conflict.title} ({conflict.start}-{conflict.end})")


class EngineFactory:
    """Factory for creating AvailabilityEngine instances with dependency injection."""

    @staticmethod
    def create(db_path: Optional[str] = None, clock: Clock = local_now) -> AvailabilityEngine:
        """
        Create an engine wired to the SQLite adapters.

        Args:
            db_path: Database file (default: Config.DB_PATH)
            clock: Wall-clock source

        Raises:
            ValueError: If configuration is invalid
        """
        logger.info("Creating AvailabilityEngine via factory")

        if not Config.validate():
            raise ValueError("Configuration validation failed. Check your .env settings.")

        store, users = ServiceFactory.create_services(db_path, clock)
        return AvailabilityEngine(store, users, clock=clock)
