# File: availability/utils/display.py

from collections import defaultdict
from typing import List

from availability.models import Interval, AvailabilityStatistics
from availability.utils.logger import setup_logger

logger = setup_logger(__name__)


def pretty_print_view(intervals: List[Interval], heading: str = "Calendar") -> None:
    """
    Print a readable version of a calendar view, grouped by date.

    Args:
        intervals: Start-ordered intervals (stored and/or synthesized)
        heading: Title printed above the view
    """
    if not intervals:
        logger.warning("No calendar data to display")
        print("No calendar data to display.")
        return

    logger.debug(f"Pretty-printing {len(intervals)} intervals")

    by_date = defaultdict(list)
    for interval in intervals:
        by_date[interval.start.date()].append(interval)

    print("\n" + "=" * 60)
    print(f"  {heading}")
    print("=" * 60)

    for day in sorted(by_date):
        print(f"\n{day.strftime('%A %d %B %Y')}")
        print("-" * 60)
        for interval in by_date[day]:
            if interval.synthesized:
                marker = "  "
            elif interval.is_busy:
                marker = "##"
            else:
                marker = "--"

            time_range = f"{interval.start.strftime('%H:%M')}-{interval.end.strftime('%H:%M')}"
            if interval.is_multi_day():
                time_range += f" (until {interval.end.strftime('%d %b')})"

            label = interval.title or "Untitled"
            if interval.id is not None:
                label += f"  [#{interval.id}]"
            print(f"  {marker} {time_range:<24} {label}")

    print()


def print_statistics(stats: AvailabilityStatistics) -> None:
    """Print interval counts."""
    print(f"Total events:    {stats.total}")
    print(f"Free time slots: {stats.free}")
    print(f"Busy time slots: {stats.busy}")
