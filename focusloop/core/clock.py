"""Interval Clock: drives a single interval to completion or cancellation.

One foreground control loop multiplexes three event sources:

- the per-second tick (advance elapsed by exactly one, redraw progress),
- the terminal-resize poll (~500 ms; redraw header, then progress),
- the cancel token (return CANCELLED immediately).

The loop blocks in ``CancelToken.wait()`` with a timeout equal to the time
left until the next tick or poll deadline, so whichever event is ready first
wins and a cancellation is observed within one wait slice.  Deadlines are
kept on a monotonic clock and advanced by fixed steps, so ticks do not drift.

The completion notification fires one second before the nominal end
(elapsed == total - 1); the loop still runs the last tick before returning
COMPLETED.  The cursor is hidden for the duration of the loop and restored
on every exit path.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from focusloop.core.cancellation import CancelToken
from focusloop.display.renderer import LiveRenderer
from focusloop.display.surface import terminal_size
from focusloop.models.intervals import IntervalKind, IntervalOutcome
from focusloop.models.render import RenderState
from focusloop.notify.dispatcher import Notifier

logger = logging.getLogger(__name__)

DEFAULT_TICK_SECONDS = 1.0
DEFAULT_RESIZE_POLL_SECONDS = 0.5


class ClockBusyError(RuntimeError):
    """Raised when ``run`` is called while another interval is running."""


class IntervalClock:
    """Runs one interval at a time.

    Parameters
    ----------
    renderer:
        Live Renderer used for every frame.
    notifier:
        Receives the completion notification one second before the end.
    size_source:
        Returns the current ``(width, height)`` of the terminal.
    tick_seconds / resize_poll_seconds:
        Cadence of the tick and of the resize poll.
    monotonic:
        Monotonic time source (seconds).  Injected by tests.
    """

    def __init__(
        self,
        renderer: LiveRenderer,
        notifier: Notifier,
        *,
        size_source: Callable[[], tuple[int, int]] = terminal_size,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
        resize_poll_seconds: float = DEFAULT_RESIZE_POLL_SECONDS,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        if tick_seconds <= 0 or resize_poll_seconds <= 0:
            raise ValueError("tick_seconds and resize_poll_seconds must be positive")
        self.renderer = renderer
        self.notifier = notifier
        self._size_source = size_source
        self._tick = tick_seconds
        self._poll = resize_poll_seconds
        self._monotonic = monotonic
        self._running = False
        self._elapsed = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed_seconds(self) -> int:
        """Elapsed seconds of the current (or most recent) run."""
        return self._elapsed

    def run(
        self,
        duration_seconds: int,
        kind: IntervalKind,
        token: CancelToken,
        *,
        cycle_number: int = 1,
        label: str = "",
        message: str = "",
    ) -> IntervalOutcome:
        """Run one interval and return COMPLETED or CANCELLED.

        *message* is shown under the box for the whole interval.
        """
        if duration_seconds <= 0:
            raise ValueError(f"duration must be positive, got {duration_seconds}")
        if self._running:
            raise ClockBusyError("An interval is already running")

        self._running = True
        self._elapsed = 0
        width, height = self._size_source()
        state = RenderState(
            elapsed_seconds=0,
            total_seconds=duration_seconds,
            terminal_width=width,
            terminal_height=height,
            kind=kind,
            cycle_number=cycle_number,
            label=label or kind.name,
            message=message,
        )
        logger.debug("Clock: %s interval of %ds started", kind.value, duration_seconds)

        try:
            self.renderer.begin(state)
            outcome = self._loop(state, token)
        except KeyboardInterrupt:
            # Interrupt arrived without an installed listener
            token.cancel()
            outcome = IntervalOutcome.CANCELLED
        finally:
            self.renderer.end()
            self._running = False

        logger.debug(
            "Clock: %s interval %s at %d/%ds",
            kind.value,
            outcome.value,
            self._elapsed,
            duration_seconds,
        )
        return outcome

    def _loop(self, state: RenderState, token: CancelToken) -> IntervalOutcome:
        total = state.total_seconds
        notified = False
        last_size = state.terminal_size

        start = self._monotonic()
        next_tick = start + self._tick
        next_poll = start + self._poll

        while True:
            timeout = max(min(next_tick, next_poll) - self._monotonic(), 0.0)
            if token.wait(timeout):
                return IntervalOutcome.CANCELLED

            now = self._monotonic()

            if now >= next_poll:
                next_poll += self._poll
                size = self._size_source()
                if size != last_size:
                    last_size = size
                    state = state.model_copy(
                        update={"terminal_width": size[0], "terminal_height": size[1]}
                    )
                    logger.debug("Clock: terminal resized to %dx%d", *size)
                    # Header first, so the numbers land in the new box position
                    self.renderer.draw_header(state)
                    self.renderer.draw_progress(state)

            if now >= next_tick:
                next_tick += self._tick
                self._elapsed += 1
                state = state.model_copy(update={"elapsed_seconds": self._elapsed})
                self.renderer.draw_progress(state)

                if not notified and self._elapsed >= total - 1:
                    notified = True
                    self.notifier.notify_complete(state.kind)

                if self._elapsed >= total:
                    return IntervalOutcome.COMPLETED
