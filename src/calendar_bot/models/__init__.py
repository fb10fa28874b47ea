"""Domain models for the calendar bot."""

from calendar_bot.models.interval import (
    OVERLAP_MARGIN,
    Interval,
    day_window,
    end_of_day,
    overlaps,
    start_of_day,
)
from calendar_bot.models.event import (
    PENDING_STATUSES,
    Attendee,
    Event,
    ResponseStatus,
    TimestampParseError,
    format_timestamp,
    parse_timestamp,
)

__all__ = [
    # Interval
    "OVERLAP_MARGIN",
    "Interval",
    "day_window",
    "end_of_day",
    "overlaps",
    "start_of_day",
    # Event
    "PENDING_STATUSES",
    "Attendee",
    "Event",
    "ResponseStatus",
    "TimestampParseError",
    "format_timestamp",
    "parse_timestamp",
]
