from .enums import IntervalSource
from .common import parse_iso_datetime, format_iso_datetime, parse_bool
from .interval import (
    Interval,
    interval_from_dict,
    normalize_keys,
    DEFAULT_TIMEZONE_LABEL,
    UPDATABLE_FIELDS,
)
from .user import User
from .api import WriteResult, AvailabilityStatistics, ValidationError

__all__ = [
    "IntervalSource",
    "parse_iso_datetime",
    "format_iso_datetime",
    "parse_bool",
    "Interval",
    "interval_from_dict",
    "normalize_keys",
    "DEFAULT_TIMEZONE_LABEL",
    "UPDATABLE_FIELDS",
    "User",
    "WriteResult",
    "AvailabilityStatistics",
    "ValidationError"
]
