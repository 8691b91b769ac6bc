# File: schedule_overlay/models/event.py

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from .common import InvalidEventError, parse_iso_datetime
from .enums import EventType


@dataclass
class Event:
    """An availability poll: candidate days plus a daily window length."""
    type: EventType
    dates: List[datetime]
    duration: float  # hours from each anchor's time of day

    # Optional metadata
    name: Optional[str] = None
    event_id: Optional[str] = None

    def __post_init__(self):
        """Validate event data."""
        if isinstance(self.type, str):
            try:
                self.type = EventType(self.type)
            except ValueError as e:
                raise InvalidEventError(f"Unknown event type: {self.type!r}") from e

        if not self.dates:
            raise InvalidEventError("Event must have at least one date")
        self.dates = [parse_iso_datetime(d) for d in self.dates]

        if self.duration is None or self.duration <= 0:
            raise InvalidEventError(f"Event duration must be positive: {self.duration}")

    @property
    def is_days_of_week(self) -> bool:
        return self.type == EventType.DAYS_OF_WEEK

    def to_dict(self) -> dict:
        """Convert to the persisted dictionary shape."""
        return {
            '_id': self.event_id,
            'name': self.name,
            'type': self.type.value,
            'dates': [d.isoformat() for d in self.dates],
            'duration': self.duration,
        }


def event_from_dict(data: dict) -> Event:
    """Create Event from its persisted dictionary form."""
    raw_duration = data.get('duration')
    return Event(
        type=data.get('type', EventType.SPECIFIC_DATES.value),
        dates=list(data.get('dates') or []),
        duration=float(raw_duration) if raw_duration is not None else None,
        name=data.get('name'),
        event_id=data.get('_id') or data.get('event_id'),
    )
