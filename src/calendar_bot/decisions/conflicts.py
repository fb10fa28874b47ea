"""Conflict scanning against already accepted events.

A candidate only counts as a conflict when the user has accepted it and its
interval overlaps the pending event under the one-minute nudge rule. Bad
candidates (user not invited, malformed timestamps) are skipped so they never
hide a conflict with the remaining ones.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from calendar_bot.decisions.attendee import find_self
from calendar_bot.models.event import Event, ResponseStatus, TimestampParseError
from calendar_bot.models.interval import Interval, overlaps

logger = logging.getLogger(__name__)


def find_conflict(
    pending: Interval,
    candidates: Iterable[Event],
    email: str,
) -> Event | None:
    """Find the first accepted candidate overlapping the pending interval.

    Args:
        pending: Interval of the event awaiting a decision
        candidates: Events on the same day(s)
        email: The configured user's email address

    Returns:
        The first conflicting event, or None
    """
    for candidate in candidates:
        attendance = find_self(email, candidate.attendees)
        if attendance is None:
            continue

        # Only confirmed commitments block a new event
        if attendance.response_status != ResponseStatus.ACCEPTED.value:
            continue

        try:
            candidate_interval = candidate.interval()
        except TimestampParseError as e:
            logger.warning(f"Skipping candidate {candidate.id}: {e}")
            continue

        if overlaps(pending, candidate_interval):
            logger.info(f"\tfound intersection with {candidate.summary} ({candidate_interval})")
            return candidate

    return None


def has_conflict(
    pending: Interval,
    candidates: Iterable[Event],
    email: str,
) -> bool:
    """Check whether any accepted candidate overlaps the pending interval."""
    return find_conflict(pending, candidates, email) is not None
