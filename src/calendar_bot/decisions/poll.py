"""A single polling pass over upcoming events."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from calendar_bot.calendar.base import CalendarClient
from calendar_bot.decisions.engine import DecisionEngine, Outcome

logger = logging.getLogger(__name__)

# Page size of the upcoming events listing
DEFAULT_MAX_RESULTS = 100


@dataclass
class CycleResult:
    """Result of one polling pass."""

    started_at: datetime
    events_found: int = 0
    processed_count: int = 0
    outcomes: list[Outcome] = field(default_factory=list)

    @property
    def errors(self) -> list[Outcome]:
        """Outcomes that failed or could not be persisted."""
        return [o for o in self.outcomes if o.error_kind is not None]

    @property
    def success(self) -> bool:
        return len(self.errors) == 0


class PollCycle:
    """Runs every upcoming event through the decision engine once.

    The cycle holds no state between runs; the caller owns scheduling.

    Example:
        ```python
        cycle = PollCycle(calendar, DecisionEngine(calendar, email))
        result = cycle.run_once()
        print(result.processed_count)
        ```
    """

    def __init__(
        self,
        calendar: CalendarClient,
        engine: DecisionEngine,
        max_results: int = DEFAULT_MAX_RESULTS,
    ):
        self.calendar = calendar
        self.engine = engine
        self.max_results = max_results

    def run_once(self, now: datetime | None = None) -> CycleResult:
        """Check upcoming events and answer the pending ones.

        Args:
            now: Start of the listing window (defaults to the current time)

        Returns:
            CycleResult with the per-event outcomes

        Raises:
            CalendarError: If the upcoming events cannot be listed
        """
        now = now or datetime.now(timezone.utc)
        logger.info(f"Checking calendar {now.isoformat()}")

        events = self.calendar.list_upcoming_events(now, self.max_results)
        result = CycleResult(started_at=now, events_found=len(events))

        if not events:
            logger.info("No upcoming events found.")
            return result

        logger.info("Upcoming events:")
        for event in events:
            outcome = self.engine.process(event)
            result.outcomes.append(outcome)
            if outcome.is_actionable:
                result.processed_count += 1

        if result.processed_count == 0:
            logger.info("No upcoming events that needs action found.")

        return result
