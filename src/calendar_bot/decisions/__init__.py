"""Accept/decline decisions for pending invitations.

## Flow

1. `PollCycle` lists upcoming events
2. `DecisionEngine` evaluates each one
3. `find_conflict` checks the same-day accepted events
4. The decision is written back through the calendar client
"""

from calendar_bot.decisions.attendee import find_self
from calendar_bot.decisions.conflicts import find_conflict, has_conflict
from calendar_bot.decisions.engine import (
    DecisionEngine,
    ErrorKind,
    Outcome,
    OutcomeKind,
)
from calendar_bot.decisions.poll import CycleResult, PollCycle

__all__ = [
    "find_self",
    "find_conflict",
    "has_conflict",
    "DecisionEngine",
    "ErrorKind",
    "Outcome",
    "OutcomeKind",
    "CycleResult",
    "PollCycle",
]
