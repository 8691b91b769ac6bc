from .enums import EventType, ClampBound
from .common import InvalidDateError, InvalidEventError, parse_iso_datetime
from .context import OverlayContext
from .event import Event, event_from_dict
from .calendar import BusyBlock, ClippedBusyBlock, busy_block_from_dict

__all__ = [
    "EventType",
    "ClampBound",
    "InvalidDateError",
    "InvalidEventError",
    "parse_iso_datetime",
    "OverlayContext",
    "Event",
    "event_from_dict",
    "BusyBlock",
    "ClippedBusyBlock",
    "busy_block_from_dict",
]
