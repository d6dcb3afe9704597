"""Cooperative cancellation for the Interval Clock.

``CancelToken`` is a single-slot notification: the interrupt handler writes
to it once, the clock's control loop blocks on it between deadlines.
``InterruptListener`` owns the SIGINT/SIGTERM handlers for the lifetime of
one interval and translates the first signal into ``token.cancel()``.

Python always runs signal handlers on the main thread, between bytecodes.
The handler here does nothing but set the token, so the clock remains the
only code that touches elapsed time and ledger state.
"""

from __future__ import annotations

import logging
import signal
import threading
from types import FrameType, TracebackType
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class CancelToken:
    """Single-fire cancellation notification.

    ``cancel()`` may be called any number of times; only the first has an
    effect.  ``wait(timeout)`` returns True as soon as the token fires, or
    False once *timeout* seconds pass without it firing.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._event.wait(timeout)


class InterruptListener:
    """Context manager that cancels *token* on SIGINT/SIGTERM.

    Previous handlers are restored on exit.  When used off the main thread
    (where ``signal.signal`` is not allowed) the listener installs nothing;
    a ``KeyboardInterrupt`` reaching the clock is handled there instead.

    Usage
    -----
    >>> token = CancelToken()
    >>> with InterruptListener(token):
    ...     outcome = clock.run(duration, kind, token)
    """

    def __init__(
        self,
        token: CancelToken,
        signals: tuple[signal.Signals, ...] = DEFAULT_SIGNALS,
    ) -> None:
        self._token = token
        self._signals = signals
        self._previous: dict[signal.Signals, Any] = {}

    @property
    def installed(self) -> bool:
        return bool(self._previous)

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        if not self._token.cancelled:
            logger.info("Received %s; cancelling interval", signal.Signals(signum).name)
        self._token.cancel()

    def __enter__(self) -> InterruptListener:
        for sig in self._signals:
            try:
                self._previous[sig] = signal.signal(sig, self._handle)
            except ValueError:
                logger.debug("Cannot install %s handler outside the main thread", sig.name)
                break
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        for sig, previous in self._previous.items():
            # None means the old handler was not installed from Python
            signal.signal(sig, signal.SIG_DFL if previous is None else previous)
        self._previous.clear()
