"""Decision engine for pending invitations.

Takes one event through the full decision:

1. Parse the event's start and end
2. Find the user's own attendee record
3. Skip events that are not pending (needsAction or tentative)
4. Fetch every event of the day window the event spans
5. Scan the accepted ones for an overlap
6. Decline on conflict, accept otherwise
7. Persist the new response status, notifying the other attendees

Steps 1-6 are `evaluate()`, which only reads. Step 7 is `apply()`, which
writes through the calendar client. Every failure is confined to the event
that caused it and reported on its `Outcome`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from calendar_bot.calendar.base import CalendarClient, CalendarError
from calendar_bot.decisions.attendee import find_self
from calendar_bot.decisions.conflicts import find_conflict
from calendar_bot.models.event import Event, ResponseStatus, TimestampParseError
from calendar_bot.models.interval import day_window

logger = logging.getLogger(__name__)


class OutcomeKind(str, Enum):
    """What happened to an event."""

    DECIDED = "decided"  # Accepted or declined
    NO_OP = "no_op"  # Already answered, nothing to do
    ERROR = "error"  # Could not be decided this cycle


class ErrorKind(str, Enum):
    """Per-event failure categories."""

    ATTENDEE_NOT_FOUND = "attendee_not_found"
    TIMESTAMP_PARSE = "timestamp_parse"
    FETCH_FAILED = "fetch_failed"
    UPDATE_FAILED = "update_failed"


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating one event."""

    event: Event
    kind: OutcomeKind
    new_status: ResponseStatus | None = None
    error_kind: ErrorKind | None = None
    error: str | None = None
    updated_event: Event | None = None  # Copy carrying new_status
    conflict: Event | None = None
    persisted: bool | None = None  # None until apply() has run

    @property
    def is_decided(self) -> bool:
        """Whether a decision was made for this event."""
        return self.kind == OutcomeKind.DECIDED

    @property
    def is_actionable(self) -> bool:
        """Whether the event needed attention, decided or failed."""
        return self.kind != OutcomeKind.NO_OP

    @classmethod
    def failed(cls, event: Event, error_kind: ErrorKind, error: str) -> Outcome:
        return cls(event=event, kind=OutcomeKind.ERROR, error_kind=error_kind, error=error)


class DecisionEngine:
    """Accepts or declines pending invitations for one user.

    Example:
        ```python
        engine = DecisionEngine(calendar, "me@example.com")

        outcome = engine.evaluate(event)
        if outcome.is_decided:
            outcome = engine.apply(outcome)

        # Or in one step
        outcome = engine.process(event)
        ```
    """

    def __init__(self, calendar: CalendarClient, email: str):
        """Initialize the engine.

        Args:
            calendar: Backend used to fetch candidates and persist decisions
            email: The configured user's email address
        """
        self.calendar = calendar
        self.email = email

    def evaluate(self, event: Event) -> Outcome:
        """Decide what to answer for an event, without writing anything.

        Args:
            event: Event from the upcoming listing

        Returns:
            Outcome describing the decision, a no-op or an error
        """
        try:
            interval = event.interval()
        except TimestampParseError as e:
            logger.warning(f"Skipping event {event.id} ({event.summary}): {e}")
            return Outcome.failed(event, ErrorKind.TIMESTAMP_PARSE, str(e))

        attendance = find_self(self.email, event.attendees)
        if attendance is None:
            message = f"{self.email} is not an attendee of event {event.id} ({event.summary})"
            logger.warning(message)
            return Outcome.failed(event, ErrorKind.ATTENDEE_NOT_FOUND, message)

        if not attendance.is_pending:
            return Outcome(event=event, kind=OutcomeKind.NO_OP)

        logger.info(f"{event.summary} ({interval}) {attendance.response_status}")

        window = day_window(interval)
        try:
            candidates = self.calendar.list_events_in_window(window.start, window.end)
        except CalendarError as e:
            logger.error(f"Unable to fetch events for {event.summary} ({window}): {e}")
            return Outcome.failed(event, ErrorKind.FETCH_FAILED, str(e))

        logger.info(f"\tfound {len(candidates)} events for analysis")

        conflict = find_conflict(interval, candidates, self.email)
        if conflict is not None:
            logger.info(f"\tdeclining event {event.summary} ({interval})")
            new_status = ResponseStatus.DECLINED
        else:
            logger.info(f"\taccepting event {event.summary} ({interval})")
            new_status = ResponseStatus.ACCEPTED

        return Outcome(
            event=event,
            kind=OutcomeKind.DECIDED,
            new_status=new_status,
            updated_event=event.with_response_status(self.email, new_status.value),
            conflict=conflict,
        )

    def apply(self, outcome: Outcome) -> Outcome:
        """Persist a decided outcome through the calendar client.

        A failed update keeps the decision and is reported on the returned
        outcome; it is not retried.

        Args:
            outcome: Outcome returned by evaluate()

        Returns:
            The outcome with `persisted` filled in
        """
        if not outcome.is_decided or outcome.updated_event is None:
            return outcome

        try:
            self.calendar.update_event(outcome.updated_event, notify_attendees=True)
        except CalendarError as e:
            logger.error(f"Unable to update event {outcome.event.id} ({outcome.event.summary}): {e}")
            return replace(
                outcome,
                persisted=False,
                error_kind=ErrorKind.UPDATE_FAILED,
                error=str(e),
            )

        return replace(outcome, persisted=True)

    def process(self, event: Event) -> Outcome:
        """Evaluate an event and persist the decision if one was made."""
        return self.apply(self.evaluate(event))
