# File: schedule_overlay/core/virtual_week.py
"""
Virtual week mapping for days-of-week events.

A days-of-week event stores template dates whose weekday is all that matters
(for example the Mon/Wed of some week in the past). Busy blocks come from a real
calendar, so each one is moved onto the matching day of the template week,
picking which real week is being displayed with `week_offset`.
"""

from datetime import date as date_type
from datetime import datetime, timedelta
from typing import Sequence

from schedule_overlay.models.context import OverlayContext
from schedule_overlay.utils.date_utils import get_weekday_index


def _sunday_of(day: date_type) -> date_type:
    return day - timedelta(days=get_weekday_index(day))


def sort_by_weekday(anchors: Sequence[datetime], context: OverlayContext) -> list:
    """
    Copy of `anchors` sorted Sunday-first by local weekday.

    An event created far east of the viewer can list Saturday before Sunday once
    converted to local time; sorting puts the week's earliest day first again.
    """
    return sorted(anchors, key=lambda a: get_weekday_index(context.to_local(a)))


def get_week_day_shift(anchors: Sequence[datetime], week_offset: int, context: OverlayContext) -> int:
    """Whole days between the anchors' Sunday and the displayed week's Sunday."""
    first_anchor = context.to_local(sort_by_weekday(anchors, context)[0])

    current_sunday = _sunday_of(context.to_local(context.now).date())
    target_sunday = current_sunday + timedelta(weeks=week_offset)
    anchor_sunday = _sunday_of(first_anchor.date())

    return (target_sunday - anchor_sunday).days


def date_to_dow_date(
    anchors: Sequence[datetime],
    date: datetime,
    week_offset: int,
    context: OverlayContext,
) -> datetime:
    """
    Move `date` into the anchors' template week.

    Args:
        anchors: Days-of-week template dates of the event
        date: Real calendar instant (e.g. a busy block start)
        week_offset: Weeks forward (positive) or back (negative) from the
            context's current week that are being displayed
        context: Reference instant and local timezone

    Returns:
        `date` moved back by the day shift between the displayed week and the
        template week, keeping its local wall-clock time
    """
    day_shift = get_week_day_shift(anchors, week_offset, context)

    if date.tzinfo is None:
        return date - timedelta(days=day_shift)

    local = context.to_local(date)
    wall_clock = local.replace(tzinfo=None) - timedelta(days=day_shift)
    return context.localize(wall_clock)
