# File: schedule_overlay/models/enums.py

from enum import Enum


class EventType(Enum):
    """Shape of an event's candidate days."""
    SPECIFIC_DATES = "specific_dates"  # dates are absolute days
    DAYS_OF_WEEK = "dow"               # only the weekday of each date matters


class ClampBound(Enum):
    """Which side of a time boundary a clamp protects."""
    UPPER = "upper"
    LOWER = "lower"
