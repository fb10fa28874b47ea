"""Lookup of the bot user's own attendee record."""

from __future__ import annotations

from collections.abc import Iterable

from calendar_bot.models.event import Attendee


def find_self(email: str, attendees: Iterable[Attendee]) -> Attendee | None:
    """Find the attendee entry for the configured user.

    Matching is exact and case-sensitive; the first match wins.

    Args:
        email: The configured user's email address
        attendees: The event's attendee list

    Returns:
        The matching Attendee, or None if the user is not on the list
    """
    for attendee in attendees:
        if attendee.email == email:
            return attendee
    return None
