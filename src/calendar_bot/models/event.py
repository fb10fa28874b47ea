"""Event models for Google Calendar resources.

Only the parts of an event the bot reads or writes are typed: the identity,
the start/end timestamps and the attendee list. Everything else is kept in
`raw_data` untouched.

Start and end stay as the RFC 3339 strings the API returned. They are parsed
on demand so that a single malformed event surfaces as a
`TimestampParseError` where it is used instead of failing the whole listing.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from calendar_bot.models.interval import Interval

# RFC 3339 date-time with a mandatory offset
RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


class TimestampParseError(ValueError):
    """Raised when an event timestamp is missing or not RFC 3339."""

    def __init__(self, value: str | None, reason: str = "not an RFC 3339 date-time"):
        super().__init__(f"Cannot parse timestamp {value!r}: {reason}")
        self.value = value


class ResponseStatus(str, Enum):
    """Attendee response statuses known to Google Calendar."""

    NEEDS_ACTION = "needsAction"
    TENTATIVE = "tentative"
    ACCEPTED = "accepted"
    DECLINED = "declined"


# Statuses that still need a decision from the bot
PENDING_STATUSES = frozenset(
    {ResponseStatus.NEEDS_ACTION.value, ResponseStatus.TENTATIVE.value}
)


def parse_timestamp(value: str | None) -> datetime:
    """Parse an RFC 3339 timestamp into an aware datetime.

    Args:
        value: Timestamp string such as ``2024-06-15T09:00:00+02:00``

    Returns:
        Timezone-aware datetime

    Raises:
        TimestampParseError: If the value is missing, has no offset or is
            otherwise malformed
    """
    if not value:
        raise TimestampParseError(value, "missing")
    if not RFC3339_PATTERN.match(value):
        raise TimestampParseError(value)
    try:
        parsed = datetime.fromisoformat(value.upper().replace("Z", "+00:00"))
    except ValueError as e:
        raise TimestampParseError(value, str(e)) from e
    return parsed


def format_timestamp(moment: datetime) -> str:
    """Format an aware datetime as RFC 3339."""
    return moment.isoformat()


class Attendee(BaseModel):
    """An event attendee.

    Unknown API fields (displayName, organizer, self, ...) are kept as extras
    so that writing the attendee list back does not drop them.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    email: str = ""
    response_status: str = Field(
        default=ResponseStatus.NEEDS_ACTION.value, alias="responseStatus"
    )

    @property
    def is_pending(self) -> bool:
        return self.response_status in PENDING_STATUSES

    def to_api(self) -> dict[str, Any]:
        """Convert to the API attendee format."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Event(BaseModel):
    """A single-occurrence calendar event."""

    model_config = ConfigDict(frozen=True)

    id: str
    summary: str = "(No title)"
    start: str | None = Field(default=None, description="RFC 3339 start dateTime")
    end: str | None = Field(default=None, description="RFC 3339 end dateTime")
    status: str = "confirmed"
    attendees: tuple[Attendee, ...] = ()
    raw_data: dict[str, Any] = Field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Event:
        """Create from a Google Calendar API event resource."""
        # All-day events only carry "date", which leaves start/end unset
        start_data = data.get("start", {})
        end_data = data.get("end", {})

        return cls(
            id=data["id"],
            summary=data.get("summary", "(No title)"),
            start=start_data.get("dateTime"),
            end=end_data.get("dateTime"),
            status=data.get("status", "confirmed"),
            attendees=tuple(
                Attendee.model_validate(item) for item in data.get("attendees", [])
            ),
            raw_data=data,
        )

    def interval(self) -> Interval:
        """Parse the event's start and end into an Interval.

        Raises:
            TimestampParseError: If either bound is malformed or end is
                before start
        """
        start = parse_timestamp(self.start)
        end = parse_timestamp(self.end)
        try:
            return Interval(start=start, end=end)
        except ValidationError as e:
            raise TimestampParseError(
                f"{self.start} / {self.end}", "end is before start"
            ) from e

    def with_response_status(self, email: str, status: str) -> Event:
        """Return a copy with the given attendee's response status replaced.

        Only the first attendee whose email matches exactly is changed.
        """
        attendees = list(self.attendees)
        for index, attendee in enumerate(attendees):
            if attendee.email == email:
                attendees[index] = attendee.model_copy(update={"response_status": status})
                break
        return self.model_copy(update={"attendees": tuple(attendees)})

    def attendees_to_api(self) -> list[dict[str, Any]]:
        """Convert the attendee list to API format."""
        return [attendee.to_api() for attendee in self.attendees]

    def __str__(self) -> str:
        return f"{self.summary} ({self.start} - {self.end})"
