# File: schedule_overlay/utils/date_utils.py
"""
Calendar-date helpers: day/hour offsets, comparisons and range labels.
"""

from datetime import datetime, timedelta
from typing import Optional

import pytz

from schedule_overlay.models.event import Event
from schedule_overlay.models.enums import EventType
from schedule_overlay.utils.time_num import split_time_num

DAY_ABBREVIATIONS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


def _shift(value: datetime, delta: timedelta) -> datetime:
    """Add an absolute duration; aware values keep their zone with a corrected UTC offset."""
    if value.tzinfo is None:
        return value + delta
    return (value.astimezone(pytz.utc) + delta).astimezone(value.tzinfo)


def get_weekday_index(date: datetime) -> int:
    """Day of week with Sunday as 0 and Saturday as 6."""
    return (date.weekday() + 1) % 7


def get_date_day_offset(date: datetime, offset: float) -> datetime:
    """Return `date` moved by `offset` days (fractional and negative allowed) as an absolute duration."""
    return _shift(date, timedelta(days=offset))


def get_date_hours_offset(date: datetime, hours_offset: float) -> datetime:
    """Return `date` moved by a time num worth of hours, truncated to whole minutes."""
    hours, minutes = split_time_num(hours_offset)
    return _shift(date, timedelta(hours=hours, minutes=minutes))


def date_compare(date1: datetime, date2: datetime) -> float:
    """Milliseconds from date2 to date1: negative if date1 is earlier, 0 if equal."""
    return (date1 - date2) / timedelta(milliseconds=1)


def compare_date_day(a: datetime, b: datetime) -> int:
    """Compare calendar days only: negative if a's day is before b's, 0 on the same day."""
    if a.year != b.year:
        return a.year - b.year
    elif a.month != b.month:
        return a.month - b.month
    return a.day - b.day


def is_between(value: datetime, lower: datetime, upper: datetime) -> bool:
    """Inclusive instant test: lower <= value <= upper."""
    return lower <= value <= upper


def is_date_in_range(date: datetime, start_date: datetime, duration: float) -> bool:
    """Whether `date` falls between start_date and start_date + duration hours (inclusive)."""
    end_date = get_date_hours_offset(start_date, duration)
    return is_between(date, start_date, end_date)


def get_date_string(date: datetime) -> str:
    """Short month/day label, e.g. May 14th is "5/14"."""
    return f"{date.month}/{date.day}"


def get_iso_date_string(date: datetime, utc: bool = False) -> str:
    """ISO calendar date ("2023-05-01"), optionally of the UTC day."""
    if utc and date.tzinfo is not None:
        date = date.astimezone(pytz.utc)
    return date.strftime("%Y-%m-%d")


def get_date_range_string(date1: datetime, date2: datetime) -> str:
    """Range label such as "5/14 - 5/27"."""
    # Ending at midnight doesn't start the next day
    if date2.hour == 0 and date2.minute == 0 and date2.second == 0 and date2.microsecond == 0:
        date2 = get_date_day_offset(date2, -1)

    return f"{get_date_string(date1)} - {get_date_string(date2)}"


def get_date_range_string_for_event(event: Event, tz: Optional[pytz.BaseTzInfo] = None) -> str:
    """
    Human readable label for an event's candidate days.

    Days-of-week events list weekday abbreviations ("Mon, Wed"); specific-date
    events show the range from the first to the last date.
    """
    dates = event.dates
    if tz is not None:
        dates = [tz.normalize(d.astimezone(tz)) if d.tzinfo else d for d in dates]

    if event.type == EventType.DAYS_OF_WEEK:
        return ", ".join(DAY_ABBREVIATIONS[get_weekday_index(d)] for d in dates)

    return get_date_range_string(dates[0], dates[-1])
