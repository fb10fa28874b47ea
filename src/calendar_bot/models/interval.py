"""Time intervals and overlap testing.

Overlap uses a nudge rule rather than strict interval intersection: the
candidate's start is moved one minute later and its end one minute earlier,
and either nudged instant falling inside the other interval counts as an
overlap. Back-to-back meetings (one ends exactly when the other starts) are
therefore not treated as conflicting.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, model_validator

# Margin applied when testing candidate intervals for overlap
OVERLAP_MARGIN = timedelta(minutes=1)


class Interval(BaseModel):
    """A time range between two timezone-aware instants."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def check_bounds(self) -> Interval:
        """Require aware instants and start <= end."""
        if self.start.tzinfo is None or self.end.tzinfo is None:
            raise ValueError("Interval bounds must be timezone-aware")
        if self.end < self.start:
            raise ValueError(f"Interval end {self.end} is before start {self.start}")
        return self

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def contains(self, moment: datetime) -> bool:
        """Check if an instant falls within the closed bounds."""
        return self.start <= moment <= self.end

    def overlaps(self, other: Interval) -> bool:
        """Check if another interval overlaps this one (nudge rule)."""
        return overlaps(self, other)

    def __str__(self) -> str:
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


def overlaps(a: Interval, b: Interval) -> bool:
    """Test whether interval b overlaps interval a.

    Args:
        a: Reference interval (the pending event)
        b: Interval tested against it (a candidate event)

    Returns:
        True if b's start plus one minute or b's end minus one minute
        lies within a's closed bounds
    """
    return a.contains(b.start + OVERLAP_MARGIN) or a.contains(b.end - OVERLAP_MARGIN)


def start_of_day(moment: datetime) -> datetime:
    """Get 00:00:00 of the instant's date, keeping its timezone."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    """Get 23:59:59 of the instant's date, keeping its timezone."""
    return moment.replace(hour=23, minute=59, second=59, microsecond=0)


def day_window(interval: Interval) -> Interval:
    """Get the window covering every day the interval touches.

    Runs from the start of the day the interval starts on to the end of the
    day it ends on, each in the timezone of the corresponding bound.
    """
    return Interval(start=start_of_day(interval.start), end=end_of_day(interval.end))
