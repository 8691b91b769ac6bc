# File: schedule_overlay/processors/overlay_processor.py
"""
Calendar overlay processing.
Normalizes busy blocks, merges them against an event's day windows and clips
them into per-day offset/length pairs (in hours) for rendering.
"""

import dataclasses
from datetime import datetime, timedelta
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from schedule_overlay.core.config_manager import Config
from schedule_overlay.core.virtual_week import date_to_dow_date
from schedule_overlay.models import (
    BusyBlock,
    ClippedBusyBlock,
    Event,
    EventType,
    InvalidEventError,
    OverlayContext,
    busy_block_from_dict,
    parse_iso_datetime,
)
from schedule_overlay.utils.date_utils import (
    get_date_day_offset,
    get_date_hours_offset,
    get_weekday_index,
)
from schedule_overlay.utils.logger import setup_logger

logger = setup_logger(__name__)

RawBusyBlock = Union[BusyBlock, Mapping[str, Any]]
CalendarEventsByDay = List[List[ClippedBusyBlock]]

_HOUR = timedelta(hours=1)


class CalendarOverlayProcessor:
    """Overlays busy blocks onto an event's candidate day windows."""

    def __init__(self, context: Optional[OverlayContext] = None):
        """
        Initialize overlay processor.

        Args:
            context: Reference instant and local timezone (default: now, in Config.TARGET_TIMEZONE)
        """
        self.context = context or OverlayContext.current()
        self.logger = logger

    # -------------------- Normalization --------------------

    def _align(self, value: datetime, reference: datetime) -> datetime:
        """Give `value` the same naive/aware flavour as `reference` so they compare."""
        if (value.tzinfo is None) == (reference.tzinfo is None):
            return value
        if value.tzinfo is None:
            return self.context.localize(value)
        return self.context.to_local(value).replace(tzinfo=None)

    def _normalize_block(
        self,
        block: RawBusyBlock,
        anchors: Sequence[datetime],
        event_type: EventType,
        week_offset: int,
    ) -> BusyBlock:
        if not isinstance(block, BusyBlock):
            block = busy_block_from_dict(dict(block))

        try:
            start = parse_iso_datetime(block.start_date)
            end = parse_iso_datetime(block.end_date)
        except ValueError:
            self.logger.error(
                f"Unparseable busy block dates ({block.start_date!r}, {block.end_date!r}) "
                f"for '{block.summary}'"
            )
            raise

        reference = anchors[0]
        start, end = self._align(start, reference), self._align(end, reference)

        if event_type == EventType.DAYS_OF_WEEK:
            start = date_to_dow_date(anchors, start, week_offset, self.context)
            end = date_to_dow_date(anchors, end, week_offset, self.context)
        elif event_type != EventType.SPECIFIC_DATES:
            raise InvalidEventError(f"Unknown event type: {event_type!r}")

        return dataclasses.replace(block, start_date=start, end_date=end)

    # -------------------- Merge --------------------

    def process_calendar_events(
        self,
        dates: Sequence[Union[str, datetime]],
        duration: float,
        busy_blocks: Sequence[RawBusyBlock],
        event_type: EventType = EventType.SPECIFIC_DATES,
        week_offset: int = 0,
    ) -> CalendarEventsByDay:
        """
        Split busy blocks by day window and position them in hours.

        Args:
            dates: Day anchors in chronological order; each starts a window
            duration: Window length in hours
            busy_blocks: Raw busy blocks (BusyBlock objects or dicts); not modified
            event_type: How anchors and blocks are interpreted
            week_offset: Displayed week relative to the current one (days-of-week only)

        Returns:
            One list per anchor, each holding ClippedBusyBlocks ordered by hours_offset
        """
        if not dates:
            raise InvalidEventError("At least one date is required")
        if duration is None or duration <= 0:
            raise InvalidEventError(f"Duration must be positive: {duration}")
        if isinstance(event_type, str):
            try:
                event_type = EventType(event_type)
            except ValueError as e:
                raise InvalidEventError(f"Unknown event type: {event_type!r}") from e

        parsed = [parse_iso_datetime(d) for d in dates]
        # Windows and blocks all share the first anchor's naive/aware flavour
        anchors = [self._align(anchor, parsed[0]) for anchor in parsed]

        normalized = [
            self._normalize_block(block, anchors, event_type, week_offset)
            for block in busy_blocks
        ]
        ordered: Tuple[BusyBlock, ...] = tuple(sorted(normalized, key=lambda b: b.start_date))

        calendar_events_by_day: CalendarEventsByDay = [[] for _ in anchors]
        cursor = 0

        for day_index, window_start in enumerate(anchors):
            if cursor >= len(ordered):
                break

            window_end = get_date_hours_offset(window_start, duration)

            # Consume every block that starts before this window closes
            while cursor < len(ordered) and ordered[cursor].start_date < window_end:
                block = ordered[cursor]
                cursor += 1

                clipped = clip_to_window(block, window_start, window_end)
                if clipped is not None:
                    calendar_events_by_day[day_index].append(clipped)

        self.logger.debug(
            f"Overlaid {len(ordered)} busy blocks onto {len(anchors)} days "
            f"({sum(len(day) for day in calendar_events_by_day)} clipped)"
        )
        return calendar_events_by_day

    def overlay(
        self,
        event: Event,
        busy_blocks: Sequence[RawBusyBlock],
        week_offset: int = 0,
    ) -> CalendarEventsByDay:
        """Overlay busy blocks onto an event's day windows."""
        return self.process_calendar_events(
            event.dates,
            event.duration,
            busy_blocks,
            event.type,
            week_offset,
        )

    # -------------------- Fetch Window --------------------

    def get_fetch_window(self, event: Event, week_offset: int = 0) -> Tuple[str, str]:
        """
        ISO-8601 bounds (time_min, time_max) of the busy blocks an overlay needs.

        Specific dates span the first anchor to the last anchor plus a buffer.
        Days-of-week events span the displayed week, starting the day before its
        Sunday, plus the same buffer.
        """
        buffer_days = Config.FETCH_BUFFER_DAYS

        if event.type == EventType.SPECIFIC_DATES:
            time_min = self.context.localize(event.dates[0])
            time_max = get_date_day_offset(self.context.localize(event.dates[-1]), buffer_days)
        elif event.type == EventType.DAYS_OF_WEEK:
            displayed = get_date_day_offset(
                self.context.to_local(self.context.now),
                week_offset * Config.DAYS_PER_WEEK,
            )
            time_min = get_date_day_offset(displayed, -(get_weekday_index(displayed) + 1))
            time_max = get_date_day_offset(time_min, Config.DAYS_PER_WEEK + buffer_days)
        else:
            raise InvalidEventError(f"Unknown event type: {event.type!r}")

        return time_min.isoformat(), time_max.isoformat()


def clip_to_window(
    block: BusyBlock,
    window_start: datetime,
    window_end: datetime,
) -> Optional[ClippedBusyBlock]:
    """
    Clip a normalized busy block to [window_start, window_end).

    Returns None when the block does not overlap the window or the clipped
    interval has no length.
    """
    start, end = block.start_date, block.end_date

    # Half-open window: touching either boundary is not an overlap
    if not (start < window_end and end > window_start):
        return None

    start = max(start, window_start)
    end = min(end, window_end)

    hours_length = (end - start) / _HOUR
    if hours_length <= 0:
        return None

    return ClippedBusyBlock(
        start_date=start,
        end_date=end,
        summary=block.summary,
        event_id=block.event_id,
        calendar_id=block.calendar_id,
        free=block.free,
        extra=dict(block.extra),
        hours_offset=(start - window_start) / _HOUR,
        hours_length=hours_length,
    )


def overlay(
    event: Event,
    busy_blocks: Sequence[RawBusyBlock],
    week_offset: int = 0,
    context: Optional[OverlayContext] = None,
) -> CalendarEventsByDay:
    """
    Overlay busy blocks onto an event's day windows.

    Pure function of its arguments (given an explicit context): the input
    sequence and its blocks are never modified.
    """
    return CalendarOverlayProcessor(context).overlay(event, busy_blocks, week_offset)


def process_calendar_events(
    dates: Sequence[Union[str, datetime]],
    duration: float,
    busy_blocks: Sequence[RawBusyBlock],
    event_type: EventType = EventType.SPECIFIC_DATES,
    week_offset: int = 0,
    context: Optional[OverlayContext] = None,
) -> CalendarEventsByDay:
    """Module-level shortcut for CalendarOverlayProcessor.process_calendar_events."""
    return CalendarOverlayProcessor(context).process_calendar_events(
        dates, duration, busy_blocks, event_type, week_offset
    )
