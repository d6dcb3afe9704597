"""One-time interactive prompts for work and break lengths.

Answers are read in minutes.  Empty, unparseable or non-positive answers
fall back to the default for that prompt; once the input stream ends (or
fails) every remaining prompt uses its default without reading again.
"""

from __future__ import annotations

import logging

from focusloop.display.surface import DrawingSurface
from focusloop.models.config import ResolvedDurations

logger = logging.getLogger(__name__)


class DurationPrompter:
    """Asks the user for work/break durations through a ``DrawingSurface``."""

    def __init__(self, surface: DrawingSurface) -> None:
        self.surface = surface
        self._input_closed = False

    def ask_minutes(self, question: str, default_minutes: float) -> float:
        """Prompt once for a number of minutes; return *default_minutes* on anything odd."""
        self.surface.write_styled(f"{question} (default {default_minutes:g}): ")
        if self._input_closed:
            self.surface.write_styled("\n")
            return default_minutes

        answer = self.surface.read_line()
        if answer is None:
            self._input_closed = True
            self.surface.write_styled("\nInput closed. Using default values.\n")
            return default_minutes

        answer = answer.strip()
        if not answer:
            return default_minutes
        try:
            minutes = float(answer)
        except ValueError:
            logger.info("Ignoring non-numeric duration %r; using %g", answer, default_minutes)
            return default_minutes
        if not minutes > 0 or minutes == float("inf"):
            return default_minutes
        return minutes

    def ask_durations(self, default_work_minutes: float, default_break_minutes: float) -> ResolvedDurations:
        work = self.ask_minutes("Work duration in minutes", default_work_minutes)
        brk = self.ask_minutes("Break duration in minutes", default_break_minutes)
        return ResolvedDurations(
            work_seconds=max(round(work * 60), 1),
            break_seconds=max(round(brk * 60), 1),
        )
