# File: availability/processors/conflict_detector.py

import datetime
from typing import List, Optional

from availability.models import Interval
from availability.services.interval_store import IntervalStore
from availability.utils.logger import setup_logger

logger = setup_logger(__name__)


class ConflictDetector:
    """
    Finds busy intervals that strictly overlap a time range.

    Conflicts are advisory: callers report them, they never block a write.
    """

    def __init__(self, store: IntervalStore):
        self.store = store

    def find_conflicts(
        self,
        owner_id: int,
        start: datetime.datetime,
        end: datetime.datetime,
        exclude_id: Optional[int] = None,
    ) -> List[Interval]:
        """
        Busy intervals of the owner overlapping [start, end).

        Args:
            owner_id: Owner whose calendar is checked
            start: Range start
            end: Range end
            exclude_id: Interval to ignore, used when re-checking an updated interval

        Returns:
            Busy intervals ordered by start
        """
        logger.debug(f"Checking conflicts for user {owner_id} between {start} and {end}")

        overlapping = self.store.find_overlapping(owner_id, start, end, exclude_id)
        conflicts = [interval for interval in overlapping if interval.is_busy]

        logger.debug(f"Found {len(conflicts)} potential conflicts")
        return conflicts

