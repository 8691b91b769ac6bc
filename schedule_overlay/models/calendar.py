# File: schedule_overlay/models/calendar.py

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Union

from .common import InvalidDateError

DateValue = Union[str, datetime]

# Keys that map onto BusyBlock attributes; anything else is carried in `extra`
_KEY_ALIASES = {
    'startDate': 'start_date',
    'start_date': 'start_date',
    'endDate': 'end_date',
    'end_date': 'end_date',
    'summary': 'summary',
    'id': 'event_id',
    'event_id': 'event_id',
    'calendarId': 'calendar_id',
    'calendar_id': 'calendar_id',
    'free': 'free',
}


def _date_to_str(value: DateValue) -> str:
    return value.isoformat() if isinstance(value, datetime) else value


@dataclass
class BusyBlock:
    """A respondent's busy interval as delivered by a calendar provider."""
    start_date: DateValue
    end_date: DateValue

    # Passthrough fields, never interpreted by the overlay
    summary: Optional[str] = None
    event_id: Optional[str] = None
    calendar_id: Optional[str] = None
    free: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        result = dict(self.extra)
        result.update({
            'startDate': _date_to_str(self.start_date),
            'endDate': _date_to_str(self.end_date),
            'summary': self.summary,
            'id': self.event_id,
            'calendarId': self.calendar_id,
            'free': self.free,
        })
        return result


@dataclass
class ClippedBusyBlock(BusyBlock):
    """A busy block clipped to one day window, positioned in hours from the window start."""
    hours_offset: float = 0.0
    hours_length: float = 0.0

    def to_dict(self) -> dict:
        result = super().to_dict()
        result['hoursOffset'] = self.hours_offset
        result['hoursLength'] = self.hours_length
        return result


def busy_block_from_dict(data: dict) -> BusyBlock:
    """Create BusyBlock from a raw dict (camelCase or snake_case keys)."""
    known: Dict[str, Any] = {}
    extra: Dict[str, Any] = dict(data.get('extra') or {})
    for key, value in data.items():
        if key == 'extra':
            continue
        attr = _KEY_ALIASES.get(key)
        if attr:
            known[attr] = value
        else:
            extra[key] = value

    if 'start_date' not in known or 'end_date' not in known:
        raise InvalidDateError("Busy block needs both startDate and endDate")

    return BusyBlock(
        start_date=known['start_date'],
        end_date=known['end_date'],
        summary=known.get('summary'),
        event_id=known.get('event_id'),
        calendar_id=known.get('calendar_id'),
        free=bool(known.get('free', False)),
        extra=extra,
    )
