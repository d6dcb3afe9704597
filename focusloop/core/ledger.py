"""Append-only Session Ledger: every interval attempted in this process.

The Session Ledger is the source of truth for the recap.  The renderer and
the recap printer are projections of it; they never compute totals
themselves.

Design:
- Append-only: ``add_interval()`` is the only way in; nothing is removed.
- The only mutation is an interval's outcome, PENDING -> COMPLETED or
  PENDING -> CANCELLED, enforced by ``VALID_OUTCOME_TRANSITIONS``.
- ``total_completed_seconds`` changes only inside ``mark_completed()``.
- In-memory only; a new process starts with an empty ledger.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from focusloop.models.intervals import (
    VALID_OUTCOME_TRANSITIONS,
    Interval,
    IntervalKind,
    IntervalOutcome,
    LedgerSnapshot,
)

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


class InvalidOutcomeError(RuntimeError):
    """Raised when an interval is moved from one terminal outcome to another."""


class SessionLedger:
    """Ordered, append-only record of intervals plus a running completed total.

    Parameters
    ----------
    now:
        Wall-clock source used to stamp ``start_time``.  Defaults to local
        time so the recap can print HH:MM in the user's timezone.
    """

    def __init__(self, now: Callable[[], datetime] = _local_now) -> None:
        self._now = now
        self._intervals: list[Interval] = []
        self._total_completed_seconds = 0

    # ------------------------------------------------------------------
    # Core: append-only write
    # ------------------------------------------------------------------

    def add_interval(self, duration_seconds: int, kind: IntervalKind) -> int:
        """Append a PENDING interval starting now and return its index."""
        start = self._now()
        interval = Interval(
            index=len(self._intervals),
            kind=kind,
            duration_seconds=duration_seconds,
            start_time=start,
            end_time=start + timedelta(seconds=duration_seconds),
        )
        self._intervals.append(interval)
        logger.debug(
            "Ledger: interval %d added (%s, %ds)", interval.index, kind.value, duration_seconds
        )
        return interval.index

    # ------------------------------------------------------------------
    # Outcome updates
    # ------------------------------------------------------------------

    def mark_completed(self, index: int) -> None:
        """Mark an interval as naturally completed and add it to the total.

        Out-of-range indices are ignored.  Marking an already-completed
        interval again is a no-op.
        """
        if self._set_outcome(index, IntervalOutcome.COMPLETED):
            self._total_completed_seconds += self._intervals[index].duration_seconds

    def mark_cancelled(self, index: int) -> None:
        """Mark an interval as cancelled.  Never touches the completed total."""
        self._set_outcome(index, IntervalOutcome.CANCELLED)

    def _set_outcome(self, index: int, outcome: IntervalOutcome) -> bool:
        """Apply *outcome* to the interval at *index*.

        Returns True only when the outcome actually changed.
        """
        if not 0 <= index < len(self._intervals):
            logger.debug("Ledger: ignoring %s for unknown interval %d", outcome.value, index)
            return False

        current = self._intervals[index]
        if current.outcome == outcome:
            return False

        allowed = VALID_OUTCOME_TRANSITIONS.get(current.outcome, set())
        if outcome not in allowed:
            raise InvalidOutcomeError(
                f"Cannot mark interval {index} {outcome.value}: "
                f"it is already {current.outcome.value}"
            )

        self._intervals[index] = current.model_copy(update={"outcome": outcome})
        logger.debug("Ledger: interval %d %s", index, outcome.value)
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._intervals)

    def get(self, index: int) -> Interval | None:
        if 0 <= index < len(self._intervals):
            return self._intervals[index]
        return None

    @property
    def intervals(self) -> tuple[Interval, ...]:
        return tuple(self._intervals)

    @property
    def total_completed_seconds(self) -> int:
        return self._total_completed_seconds

    @property
    def completed_count(self) -> int:
        return sum(1 for iv in self._intervals if iv.completed)

    @property
    def cancelled_count(self) -> int:
        return sum(1 for iv in self._intervals if iv.cancelled)

    def snapshot(self) -> LedgerSnapshot:
        """Return a frozen copy suitable for rendering the recap."""
        return LedgerSnapshot(
            intervals=tuple(self._intervals),
            total_completed_seconds=self._total_completed_seconds,
        )
