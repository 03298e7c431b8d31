# File: availability/processors/free_time_synthesizer.py
"""
Implied free time.

A single left-to-right sweep over the stored intervals of a window emits
the gaps between them. The results are never persisted.
"""

import datetime
from typing import List, Optional, Sequence

from availability.core.config_manager import Config
from availability.models import Interval
from availability.utils.logger import setup_logger

logger = setup_logger(__name__)


class FreeTimeSynthesizer:
    """Builds free-time intervals for the gaps in a window."""

    def __init__(
        self,
        title: str = Config.FREE_TIME_TITLE,
        description: str = Config.FREE_TIME_DESCRIPTION,
    ):
        self.title = title
        self.description = description

    def synthesize(
        self,
        owner_id: int,
        window_start: datetime.datetime,
        window_end: datetime.datetime,
        stored_intervals: Sequence[Interval],
        owner_name: Optional[str] = None,
    ) -> List[Interval]:
        """
        Compute the free gaps of [window_start, window_end).

        Args:
            owner_id: Owner the free time is attributed to
            window_start: Window start
            window_end: Window end
            stored_intervals: The owner's stored intervals overlapping the window
            owner_name: Display name used in the free-time description

        Returns:
            Synthesized intervals in chronological order; none has start >= end
        """
        logger.debug(f"Calculating implied free time between {len(stored_intervals)} events")

        description = self.description
        if owner_name:
            description = f"{description} for {owner_name}"

        # sorted() is stable, so equal starts keep fetch order
        ordered = sorted(stored_intervals, key=lambda interval: interval.start)

        free_slots: List[Interval] = []
        cursor = window_start

        for interval in ordered:
            if cursor < interval.start:
                free_slots.append(self._free_slot(owner_id, cursor, interval.start, description))
            # max() keeps contained and overlapping intervals from moving the cursor back
            cursor = max(cursor, interval.end)

        if cursor < window_end:
            free_slots.append(self._free_slot(owner_id, cursor, window_end, description))

        logger.debug(f"Calculated {len(free_slots)} implied free time slots")
        return free_slots

    def _free_slot(
        self,
        owner_id: int,
        start: datetime.datetime,
        end: datetime.datetime,
        description: str,
    ) -> Interval:
        return Interval.free_slot(owner_id, start, end, title=self.title, description=description)

    @staticmethod
    def merge(stored: Sequence[Interval], synthesized: Sequence[Interval]) -> List[Interval]:
        """Stored and synthesized intervals in one start-ordered list."""
        return sorted([*stored, *synthesized], key=lambda interval: interval.start)
