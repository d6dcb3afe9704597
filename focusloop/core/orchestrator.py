"""Cycle Orchestrator: sequences WORK -> BREAK -> continue? cycles.

The Orchestrator wires together the SessionLedger, IntervalClock,
LiveRenderer and DurationPrompter.  It owns the cycle counters and the
``ResolvedDurations`` for the process, and drives the Interval Clock once
per interval.  Every state change goes through ``VALID_TRANSITIONS``.

Transitions
-----------
AWAITING_WORK      -> RUNNING_WORK        durations resolved
RUNNING_WORK       -> AWAITING_BREAK      clock completed
RUNNING_WORK       -> FINISHED            clock cancelled
AWAITING_BREAK     -> RUNNING_BREAK       durations resolved
RUNNING_BREAK      -> AWAITING_CONTINUE   clock completed
RUNNING_BREAK      -> FINISHED            clock cancelled
AWAITING_CONTINUE  -> AWAITING_WORK       yes / auto-confirm (cycle + 1)
AWAITING_CONTINUE  -> FINISHED            no
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from focusloop.config import FocusSettings
from focusloop.core.cancellation import CancelToken, InterruptListener
from focusloop.core.clock import IntervalClock
from focusloop.core.ledger import SessionLedger
from focusloop.display.prompts import DurationPrompter
from focusloop.display.renderer import BREAK_MESSAGE, LiveRenderer
from focusloop.models.config import ResolvedDurations, SessionConfig
from focusloop.models.intervals import IntervalKind, IntervalOutcome, LedgerSnapshot
from focusloop.models.render import RenderState

logger = logging.getLogger(__name__)


class CycleState(str, Enum):
    """States of the cycle loop."""

    AWAITING_WORK = "awaiting_work"
    RUNNING_WORK = "running_work"
    AWAITING_BREAK = "awaiting_break"
    RUNNING_BREAK = "running_break"
    AWAITING_CONTINUE = "awaiting_continue"
    FINISHED = "finished"


# Valid state transitions: enforced by CycleOrchestrator._transition.
# FINISHED is terminal.
VALID_TRANSITIONS: dict[CycleState, set[CycleState]] = {
    CycleState.AWAITING_WORK: {CycleState.RUNNING_WORK},
    CycleState.RUNNING_WORK: {CycleState.AWAITING_BREAK, CycleState.FINISHED},
    CycleState.AWAITING_BREAK: {CycleState.RUNNING_BREAK},
    CycleState.RUNNING_BREAK: {CycleState.AWAITING_CONTINUE, CycleState.FINISHED},
    CycleState.AWAITING_CONTINUE: {CycleState.AWAITING_WORK, CycleState.FINISHED},
    CycleState.FINISHED: set(),  # terminal
}

_NEXT_AFTER_COMPLETED: dict[IntervalKind, CycleState] = {
    IntervalKind.WORK: CycleState.AWAITING_BREAK,
    IntervalKind.BREAK: CycleState.AWAITING_CONTINUE,
}

_RUNNING_STATE: dict[IntervalKind, CycleState] = {
    IntervalKind.WORK: CycleState.RUNNING_WORK,
    IntervalKind.BREAK: CycleState.RUNNING_BREAK,
}


class InvalidTransitionError(RuntimeError):
    """Raised when a requested cycle-state transition is not valid."""


class CycleOrchestrator:
    """Runs work/break cycles until cancelled or declined.

    Parameters
    ----------
    config:
        Session configuration (explicit durations, label, auto-confirm...).
    clock:
        The Interval Clock; its renderer is reused for messages and prompts.
    ledger:
        Session Ledger to record into.  A fresh one is created if None.
    prompter:
        Asks for durations when none were configured.  Built on the clock's
        drawing surface if None.
    settings:
        Source of the default work/break lengths.
    token_factory:
        Creates the per-interval cancel token.  Injected by tests.
    """

    def __init__(
        self,
        config: SessionConfig,
        clock: IntervalClock,
        *,
        ledger: SessionLedger | None = None,
        prompter: DurationPrompter | None = None,
        settings: FocusSettings | None = None,
        token_factory: Callable[[], CancelToken] = CancelToken,
    ) -> None:
        self.config = config
        self.clock = clock
        self.ledger = ledger if ledger is not None else SessionLedger()
        self.renderer: LiveRenderer = clock.renderer
        self.prompter = prompter or DurationPrompter(self.renderer.surface)
        self._settings = settings or FocusSettings()
        self._token_factory = token_factory

        self.state = CycleState.AWAITING_WORK
        self.session_number = 1
        self.cycle_number = 1
        self._durations: ResolvedDurations | None = None
        self._last_render: RenderState | None = None

    # ------------------------------------------------------------------
    # State management
    # ------------------------------------------------------------------

    def _transition(self, target: CycleState) -> None:
        allowed = VALID_TRANSITIONS.get(self.state, set())
        if target not in allowed:
            raise InvalidTransitionError(
                f"Cannot transition from {self.state.value} to {target.value}. "
                f"Allowed: {sorted(s.value for s in allowed)}"
            )
        logger.debug("Cycle %d: %s -> %s", self.cycle_number, self.state.value, target.value)
        self.state = target

    @property
    def finished(self) -> bool:
        return self.state == CycleState.FINISHED

    # ------------------------------------------------------------------
    # Durations
    # ------------------------------------------------------------------

    @property
    def durations(self) -> ResolvedDurations | None:
        return self._durations

    def resolve_durations(self) -> ResolvedDurations:
        """Resolve work/break lengths once and cache them for the process.

        Explicit configuration wins.  With nothing configured and no
        auto-confirm, the user is prompted (once); otherwise the settings
        defaults are used.
        """
        if self._durations is not None:
            return self._durations

        cfg = self.config
        if cfg.has_explicit_durations or cfg.auto_confirm:
            self._durations = ResolvedDurations(
                work_seconds=cfg.work_seconds or self._settings.default_work_seconds,
                break_seconds=cfg.break_seconds or self._settings.default_break_seconds,
            )
        else:
            self._durations = self.prompter.ask_durations(
                self._settings.default_work_minutes,
                self._settings.default_break_minutes,
            )
        logger.info(
            "Durations resolved: work=%ds break=%ds",
            self._durations.work_seconds,
            self._durations.break_seconds,
        )
        return self._durations

    # ------------------------------------------------------------------
    # Interval execution
    # ------------------------------------------------------------------

    def label_for(self, kind: IntervalKind) -> str:
        if kind == IntervalKind.WORK and self.config.label:
            return self.config.label
        return kind.name

    def render_state(self, kind: IntervalKind, total_seconds: int = 0) -> RenderState:
        width, height = self.renderer.surface.get_size()
        return RenderState(
            total_seconds=total_seconds,
            terminal_width=width,
            terminal_height=height,
            kind=kind,
            cycle_number=self.cycle_number,
            label=self.label_for(kind),
        )

    def run_interval(self, duration_seconds: int, kind: IntervalKind) -> IntervalOutcome:
        """Record and run one interval; return its outcome.

        The interval is appended to the ledger before the clock starts and
        marked completed or cancelled while the interrupt handlers are still
        installed.
        """
        index = self.ledger.add_interval(duration_seconds, kind)
        token = self._token_factory()
        with InterruptListener(token):
            outcome = self.clock.run(
                duration_seconds,
                kind,
                token,
                cycle_number=self.cycle_number,
                label=self.label_for(kind),
                message=BREAK_MESSAGE if kind == IntervalKind.BREAK else "",
            )
            if outcome == IntervalOutcome.COMPLETED:
                self.ledger.mark_completed(index)
            else:
                self.ledger.mark_cancelled(index)

        self._last_render = self.render_state(kind, duration_seconds)
        if outcome == IntervalOutcome.CANCELLED:
            self.renderer.show_cancelled(self._last_render)
        self.session_number += 1
        return outcome

    def _run_phase(self, kind: IntervalKind) -> bool:
        """AWAITING_* -> RUNNING_* -> next state.  Returns False when finished."""
        durations = self.resolve_durations()
        seconds = durations.work_seconds if kind == IntervalKind.WORK else durations.break_seconds
        self._transition(_RUNNING_STATE[kind])
        outcome = self.run_interval(seconds, kind)
        if outcome == IntervalOutcome.CANCELLED:
            self._transition(CycleState.FINISHED)
            return False
        self._transition(_NEXT_AFTER_COMPLETED[kind])
        return True

    def _ask_continue(self) -> bool:
        if self.config.auto_confirm:
            return True
        state = self.render_state(IntervalKind.WORK)
        self.renderer.clear_message(state)
        return self.renderer.prompt_continue(state)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self, max_cycles: int | None = None) -> LedgerSnapshot:
        """Loop WORK -> BREAK -> continue? until cancelled, declined or capped.

        Returns the ledger snapshot for the recap.
        """
        while not self.finished:
            if not self._run_phase(IntervalKind.WORK):
                break
            if not self._run_phase(IntervalKind.BREAK):
                break

            if max_cycles is not None and self.cycle_number >= max_cycles:
                self._transition(CycleState.FINISHED)
                break
            if not self._ask_continue():
                self._transition(CycleState.FINISHED)
                break

            self._transition(CycleState.AWAITING_WORK)
            self.cycle_number += 1

        if self._last_render is not None:
            self.renderer.park_cursor(self._last_render)
        return self.ledger.snapshot()
