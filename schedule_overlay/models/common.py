# File: schedule_overlay/models/common.py

from datetime import datetime
from typing import Union


class InvalidDateError(ValueError):
    """Raised when a date value cannot be converted to a datetime."""


class InvalidEventError(ValueError):
    """Raised when an event definition is unusable (no dates, bad duration, unknown type)."""


def parse_iso_datetime(value: Union[str, datetime]) -> datetime:
    """Parse ISO date strings with 'Z' or offsets. Datetimes pass through unchanged."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(f"Cannot parse date value: {value!r}")

    # specific fix for Python < 3.11 which doesn't handle 'Z' natively in fromisoformat
    clean_str = value.strip().replace('Z', '+00:00')
    try:
        return datetime.fromisoformat(clean_str)
    except ValueError:
        # Fallback for simple date strings without time
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d")
        except ValueError as e:
            raise InvalidDateError(f"Cannot parse date value: {value!r}") from e
