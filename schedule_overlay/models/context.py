# File: schedule_overlay/models/context.py
"""
Explicit reference instant and timezone for the overlay.

Everything that would otherwise read the wall clock or the process timezone
(the virtual week, local time-of-day fields, timezone offsets) reads it from an
OverlayContext instead, so results are reproducible.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pytz

from schedule_overlay.core.config_manager import Config


@dataclass(frozen=True)
class OverlayContext:
    """Reference instant plus the timezone treated as "local"."""
    now: datetime
    timezone: pytz.BaseTzInfo = pytz.utc

    def __post_init__(self):
        if self.now.tzinfo is None:
            # frozen dataclass: assign through object.__setattr__
            object.__setattr__(self, 'now', self.timezone.localize(self.now))

    @classmethod
    def current(cls, tz_name: Optional[str] = None) -> 'OverlayContext':
        """Context for the real current instant in the configured timezone."""
        timezone = Config.get_timezone(tz_name)
        return cls(now=datetime.now(timezone), timezone=timezone)

    def to_local(self, value: datetime) -> datetime:
        """Express an aware datetime in the context timezone. Naive values are already local."""
        if value.tzinfo is None:
            return value
        return self.timezone.normalize(value.astimezone(self.timezone))

    def localize(self, value: datetime) -> datetime:
        """Attach the context timezone to a naive wall-clock value."""
        if value.tzinfo is not None:
            return self.to_local(value)
        return self.timezone.localize(value)

    def timezone_offset_minutes(self, at: Optional[datetime] = None) -> float:
        """Minutes to add to local time to get UTC (positive west of Greenwich)."""
        moment = self.localize(at) if at is not None else self.to_local(self.now)
        return -moment.utcoffset().total_seconds() / 60
