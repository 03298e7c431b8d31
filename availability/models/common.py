# File: availability/models/common.py

from datetime import datetime
from typing import Optional


def parse_iso_datetime(date_str: Optional[str]) -> Optional[datetime]:
    """
    Parse ISO date strings with 'Z' or offsets into naive wall-clock time.

    Interval timestamps are stored timezone-naive, so any offset in the
    input is dropped rather than converted.
    """
    if not date_str:
        return None
    if isinstance(date_str, datetime):
        return date_str.replace(tzinfo=None)
    try:
        # fromisoformat on older interpreters rejects the 'Z' suffix
        clean_str = date_str.replace('Z', '+00:00')
        return datetime.fromisoformat(clean_str).replace(tzinfo=None)
    except ValueError:
        # Fallback for simple date strings without time
        try:
            return datetime.strptime(date_str, "%Y-%m-%d")
        except ValueError:
            return None


def format_iso_datetime(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime for JSON output."""
    return value.isoformat() if value else None


def parse_bool(value) -> bool:
    """Interpret a wire boolean; strings like "false" or "0" are False."""
    if isinstance(value, str):
        return value.strip().lower() in ['yes', 'true', '1', 'on', 'y', 't']
    return bool(value)
