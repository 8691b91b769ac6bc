# File: schedule_overlay/utils/time_num.py
"""
Fractional-hour clock times ("time nums").

A time num is a float in [0, 24): 9.5 is 09:30, 13.75 is 13:45. Minutes are
always truncated, never rounded, when a time num is split back into a clock.

Naive datetimes are treated as local wall-clock values. Aware datetimes are
read in `tz` when one is given, otherwise in their own zone.
"""

import math
from datetime import datetime, time
from typing import Optional, Tuple

import pytz

from schedule_overlay.models.enums import ClampBound


def split_time_num(time_num: float) -> Tuple[int, int]:
    """Split a time num (e.g. 9.5) into (hours, minutes), e.g. (9, 30)."""
    hours = math.floor(time_num)
    minutes = math.floor((time_num - hours) * 60)
    return hours, minutes


def split_time(time_string: str) -> Tuple[int, int]:
    """Split a clock string such as "13:30" into (13, 30)."""
    hours, minutes = time_string.split(':')[:2]
    return int(hours), int(minutes)


def time_num_to_time_text(time_num: float) -> str:
    """Convert a time num to a 12-hour label: 13 -> "1 pm", 9.5 -> "9:30 am"."""
    hours, minutes = split_time_num(time_num)
    minutes_string = f":{minutes:02d}" if time_num - hours > 0 else ""

    if 0 <= time_num < 1:
        return f"12{minutes_string} am"
    elif time_num < 12:
        return f"{hours}{minutes_string} am"
    elif 12 <= time_num < 13:
        return f"12{minutes_string} pm"
    return f"{hours - 12}{minutes_string} pm"


def time_num_to_time_string(time_num: float) -> str:
    """Convert a time num to a 24-hour clock string: 9.5 -> "09:30:00"."""
    hours, minutes = split_time_num(time_num)
    return f"{hours:02d}:{minutes:02d}:00"


def _read_fields(date: datetime, utc: bool, tz: Optional[pytz.BaseTzInfo]) -> datetime:
    if date.tzinfo is None:
        return date
    if utc:
        return date.astimezone(pytz.utc)
    if tz is not None:
        return tz.normalize(date.astimezone(tz))
    return date


def date_to_time_num(date: datetime, utc: bool = False, tz: Optional[pytz.BaseTzInfo] = None) -> float:
    """Convert a datetime's clock time to a time num (seconds are ignored)."""
    fields = _read_fields(date, utc, tz)
    return fields.hour + fields.minute / 60


def _rebuild(fields: datetime, hours: int, minutes: int) -> datetime:
    naive = datetime.combine(fields.date(), time(hours, minutes))
    tzinfo = fields.tzinfo
    if tzinfo is None:
        return naive
    if hasattr(tzinfo, 'localize'):
        return tzinfo.localize(naive)
    return naive.replace(tzinfo=tzinfo)


def date_with_time_num(
    date: datetime,
    time_num: float,
    utc: bool = False,
    tz: Optional[pytz.BaseTzInfo] = None,
) -> datetime:
    """
    Return `date` with its time of day replaced by `time_num`.

    Args:
        date: Datetime whose calendar date is kept
        time_num: Clock time to set, e.g. 11.5
        utc: Read the calendar date and set the clock in UTC instead of local time
        tz: Local zone for aware datetimes (default: the datetime's own zone)

    Returns:
        New datetime on the same calendar day
    """
    hours, minutes = split_time_num(time_num)
    fields = _read_fields(date, utc, tz)
    if utc and fields.tzinfo is None:
        return datetime.combine(fields.date(), time(hours, minutes))
    if utc:
        return datetime.combine(fields.date(), time(hours, minutes), tzinfo=pytz.utc)
    return _rebuild(fields, hours, minutes)


def date_with_time(date: datetime, time_string: str) -> datetime:
    """Return `date` with its local time of day set from a clock string ("11:30")."""
    hours, minutes = split_time(time_string)
    return _rebuild(date, hours, minutes)


def clamp_date_to_time_num(date: datetime, time_num: float, bound: ClampBound) -> datetime:
    """Keep `date` from crossing `time_num`, clamping from above or below."""
    diff = date_to_time_num(date) - time_num
    if bound == ClampBound.UPPER and diff > 0:
        return date_with_time_num(date, time_num)
    elif bound == ClampBound.LOWER and diff < 0:
        return date_with_time_num(date, time_num)
    return date


def is_time_num_between_dates(time_num: float, start: datetime, end: datetime) -> bool:
    """
    Whether start.hour <= time_num <= end.hour, where the span may cross
    midnight (e.g. 22:00 to 02:00).
    """
    start_hour = start.hour
    end_hour = end.hour

    if start_hour <= end_hour:
        return start_hour <= time_num <= end_hour
    return start_hour <= time_num < 24 or 0 <= time_num <= end_hour


def utc_time_to_local_time(time_num: float, timezone_offset: float) -> float:
    """
    Convert a UTC time num to local time.

    Args:
        time_num: Time num in UTC
        timezone_offset: Minutes from local time to UTC, positive west of
            Greenwich (see OverlayContext.timezone_offset_minutes)
    """
    # result is in [0, 24) even for negative inputs
    return (time_num - timezone_offset / 60) % 24
