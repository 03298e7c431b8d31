"""
Print a calendar view from the command line.

Usage:
    python scripts/show_calendar.py USER_ID today
    python scripts/show_calendar.py USER_ID complete START END
    python scripts/show_calendar.py USER_ID month YEAR MONTH
    python scripts/show_calendar.py USER_ID all|upcoming|current|stats

START and END are ISO timestamps, e.g. 2025-11-18T08:00.
"""

import sys
import time
from pathlib import Path
from typing import List

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from availability.core.engine import EngineFactory
from availability.core.exceptions import AvailabilityError
from availability.models import parse_iso_datetime
from availability.utils.display import pretty_print_view, print_statistics
from availability.utils.logger import setup_logger

logger = setup_logger(__name__)

VIEWS = ("today", "complete", "month", "all", "upcoming", "current", "stats")


def run_view(args: List[str]) -> int:
    """Dispatch one view. Returns the process exit code."""
    if len(args) < 2 or args[1] not in VIEWS:
        print(__doc__)
        return 1

    user_id = int(args[0])
    view = args[1]
    engine = EngineFactory.create()

    if view == "today":
        pretty_print_view(engine.get_today_view(user_id), "Today")
    elif view == "complete":
        if len(args) != 4:
            print(__doc__)
            return 1
        start, end = parse_iso_datetime(args[2]), parse_iso_datetime(args[3])
        if start is None or end is None:
            logger.error("Could not parse START/END timestamps")
            return 1
        pretty_print_view(
            engine.get_complete_calendar_view(user_id, start, end),
            f"Complete view {start} - {end}",
        )
    elif view == "month":
        if len(args) != 4:
            print(__doc__)
            return 1
        year, month = int(args[2]), int(args[3])
        pretty_print_view(engine.get_month_view(user_id, year, month), f"{year}/{month:02d}")
    elif view == "all":
        pretty_print_view(engine.get_all_events(user_id), "All events")
    elif view == "upcoming":
        pretty_print_view(engine.get_upcoming_events(user_id), "Upcoming")
    elif view == "current":
        pretty_print_view(engine.get_current_events(user_id), "Happening now")
    else:
        print_statistics(engine.get_statistics(user_id))
    return 0


def main() -> int:
    start_time = time.time()
    try:
        return run_view(sys.argv[1:])

    except AvailabilityError as e:
        logger.error(str(e))
        return 1

    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        return 1

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1

    finally:
        elapsed = time.time() - start_time
        logger.debug(f"Total execution time: {elapsed:.2f} seconds")


if __name__ == "__main__":
    sys.exit(main())
