"""Interval models: the unit of work recorded by the Session Ledger.

An interval's terminal result is a single tagged ``IntervalOutcome`` rather
than a pair of booleans, so an interval can never be both completed and
cancelled.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class IntervalKind(str, Enum):
    """Which half of a cycle an interval belongs to."""

    WORK = "work"
    BREAK = "break"


class IntervalOutcome(str, Enum):
    """Result of running an interval.

    ``PENDING`` is only ever seen on ledger entries for an interval that is
    still running.  The Interval Clock returns ``COMPLETED`` or ``CANCELLED``.
    """

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Outcomes an interval may move to from a given outcome.
# Terminal outcomes (COMPLETED, CANCELLED) have no outgoing moves.
VALID_OUTCOME_TRANSITIONS: dict[IntervalOutcome, set[IntervalOutcome]] = {
    IntervalOutcome.PENDING: {IntervalOutcome.COMPLETED, IntervalOutcome.CANCELLED},
    IntervalOutcome.COMPLETED: set(),  # terminal
    IntervalOutcome.CANCELLED: set(),  # terminal
}


class Interval(BaseModel):
    """A single timed WORK or BREAK period, as recorded in the ledger."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    kind: IntervalKind
    duration_seconds: int = Field(gt=0)
    start_time: datetime
    end_time: datetime
    outcome: IntervalOutcome = IntervalOutcome.PENDING

    @property
    def completed(self) -> bool:
        return self.outcome == IntervalOutcome.COMPLETED

    @property
    def cancelled(self) -> bool:
        return self.outcome == IntervalOutcome.CANCELLED


class LedgerSnapshot(BaseModel):
    """Frozen, point-in-time copy of the Session Ledger.

    ``total_completed_seconds`` is carried over from the ledger rather than
    recomputed, so the recap always shows the ledger's own running total.
    """

    model_config = ConfigDict(frozen=True)

    intervals: tuple[Interval, ...] = ()
    total_completed_seconds: int = 0

    @property
    def completed_count(self) -> int:
        return sum(1 for iv in self.intervals if iv.completed)

    @property
    def cancelled_count(self) -> int:
        return sum(1 for iv in self.intervals if iv.cancelled)
