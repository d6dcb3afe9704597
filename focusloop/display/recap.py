"""End-of-session recap: a textual projection of the Session Ledger.

Example::

    --- Session Recap ---
    1. 25m 00s - 14:00 - 14:25 ✓
    2. 5m 00s - 14:25 - 14:30 ✗
    Total: 25m 00s
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from focusloop.models.intervals import IntervalOutcome, LedgerSnapshot

RECAP_TITLE = "--- Session Recap ---"

_OUTCOME_GLYPHS: dict[IntervalOutcome, str] = {
    IntervalOutcome.COMPLETED: "✓",
    IntervalOutcome.CANCELLED: "✗",
    IntervalOutcome.PENDING: "·",
}

_OUTCOME_STYLES: dict[IntervalOutcome, str] = {
    IntervalOutcome.COMPLETED: "bold green",
    IntervalOutcome.CANCELLED: "bold red",
    IntervalOutcome.PENDING: "dim",
}


def format_duration(seconds: int) -> str:
    """``1500`` -> ``"25m 00s"``.  Hours are folded into minutes."""
    minutes, secs = divmod(max(seconds, 0), 60)
    return f"{minutes}m {secs:02d}s"


def format_recap(snapshot: LedgerSnapshot) -> list[str]:
    """Plain-text recap lines for *snapshot*."""
    lines = [RECAP_TITLE]
    for number, interval in enumerate(snapshot.intervals, start=1):
        lines.append(
            f"{number}. {format_duration(interval.duration_seconds)} - "
            f"{interval.start_time:%H:%M} - {interval.end_time:%H:%M} "
            f"{_OUTCOME_GLYPHS[interval.outcome]}"
        )
    lines.append(f"Total: {format_duration(snapshot.total_completed_seconds)}")
    return lines


def print_recap(console: Console, snapshot: LedgerSnapshot) -> None:
    """Print the recap with the outcome glyphs colored."""
    console.print()
    console.print(Text(RECAP_TITLE, style="bold"))
    for number, interval in enumerate(snapshot.intervals, start=1):
        line = Text(
            f"{number}. {format_duration(interval.duration_seconds)} - "
            f"{interval.start_time:%H:%M} - {interval.end_time:%H:%M} "
        )
        line.append(_OUTCOME_GLYPHS[interval.outcome], style=_OUTCOME_STYLES[interval.outcome])
        console.print(line)
    console.print(
        Text.assemble(("Total: ", "bold"), format_duration(snapshot.total_completed_seconds))
    )
