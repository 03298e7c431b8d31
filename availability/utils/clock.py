# File: availability/utils/clock.py
"""
Wall-clock helpers. Interval timestamps are naive, so "now" is read in the
configured zone and the tzinfo is dropped.
"""

import calendar
import datetime
from typing import Callable, Tuple

import pytz

from availability.core.config_manager import Config

Clock = Callable[[], datetime.datetime]


def local_now() -> datetime.datetime:
    """Current wall time in Config.TARGET_TIMEZONE, timezone-naive."""
    local_tz = pytz.timezone(Config.TARGET_TIMEZONE)
    return datetime.datetime.now(local_tz).replace(tzinfo=None)


def day_bounds(day: datetime.date) -> Tuple[datetime.datetime, datetime.datetime]:
    """Midnight to 23:59:59 of the given date."""
    return (
        datetime.datetime.combine(day, datetime.time.min),
        datetime.datetime.combine(day, datetime.time(23, 59, 59)),
    )


def month_bounds(
    year: int,
    month: int,
    end_truncation: datetime.timedelta,
) -> Tuple[datetime.datetime, datetime.datetime]:
    """First instant of the month, and the next month's start minus end_truncation."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be in 1..12, got {month}")

    month_start = datetime.datetime(year, month, 1)
    days_in_month = calendar.monthrange(year, month)[1]
    next_month_start = month_start + datetime.timedelta(days=days_in_month)
    return month_start, next_month_start - end_truncation
