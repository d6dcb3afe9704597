"""Shared test fixtures for focusloop.

Nothing here sleeps: the Interval Clock runs against ``SimulatedTime`` and a
``ScriptedToken`` whose ``wait()`` advances simulated time instead of
blocking, and the renderer draws onto a ``RecordingSurface``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

import pytest
from rich.text import Text

from focusloop.config import FocusSettings
from focusloop.core.cancellation import CancelToken
from focusloop.core.clock import IntervalClock
from focusloop.core.ledger import SessionLedger
from focusloop.core.orchestrator import CycleOrchestrator
from focusloop.display.renderer import LiveRenderer
from focusloop.models.config import SessionConfig
from focusloop.models.notifications import Notification
from focusloop.notify.dispatcher import Notifier


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class RecordingSurface:
    """DrawingSurface that records every call instead of drawing."""

    def __init__(self, size: tuple[int, int] = (100, 30), inputs: list[str | None] | None = None) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.styled: list[Text | str] = []
        self.size = size
        self.inputs: list[str | None] = list(inputs or [])
        self.cursor_visible = True

    def move_cursor(self, row: int, col: int) -> None:
        self.calls.append(("move", row, col))

    def clear_region(self, row: int, col: int, width: int) -> None:
        self.calls.append(("clear", row, col, width))

    def write_styled(self, text: Text | str) -> None:
        self.styled.append(text)
        self.calls.append(("write", text.plain if isinstance(text, Text) else text))

    def clear_screen(self) -> None:
        self.calls.append(("clear_screen",))

    def set_cursor_visible(self, visible: bool) -> None:
        self.cursor_visible = visible
        self.calls.append(("cursor", visible))

    def read_line(self) -> str | None:
        self.calls.append(("read",))
        if not self.inputs:
            return None
        return self.inputs.pop(0)

    def get_size(self) -> tuple[int, int]:
        return self.size

    # helpers ------------------------------------------------------------

    def writes(self) -> list[str]:
        return [c[1] for c in self.calls if c[0] == "write"]

    def count(self, name: str) -> int:
        return sum(1 for c in self.calls if c[0] == name)

    def reset(self) -> None:
        self.calls.clear()
        self.styled.clear()


class SimulatedTime:
    """Monotonic clock that only moves when a ScriptedToken waits."""

    def __init__(self) -> None:
        self.now = 0.0

    def monotonic(self) -> float:
        return self.now


class ScriptedToken(CancelToken):
    """CancelToken whose wait() advances simulated time.

    If ``cancel_after`` is given, the token fires that many simulated
    seconds after it was created.
    """

    def __init__(self, sim: SimulatedTime, cancel_after: float | None = None) -> None:
        super().__init__()
        self._sim = sim
        self._cancel_at = None if cancel_after is None else sim.now + cancel_after

    def wait(self, timeout: float | None = None) -> bool:
        if self.cancelled:
            return True
        target = self._sim.now + (timeout or 0.0)
        if self._cancel_at is not None and self._cancel_at <= target:
            self._sim.now = max(self._sim.now, self._cancel_at)
            self.cancel()
            return True
        self._sim.now = target
        return False


class RecordingSink:
    """Notification sink that remembers what it received and when."""

    def __init__(self, sim: SimulatedTime | None = None, name: str = "recording") -> None:
        self._sim = sim
        self._name = name
        self.received: list[Notification] = []
        self.times: list[float] = []

    @property
    def sink_name(self) -> str:
        return self._name

    def deliver(self, notification: Notification) -> None:
        self.received.append(notification)
        self.times.append(self._sim.now if self._sim else 0.0)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def surface() -> RecordingSurface:
    """A recording surface reporting a 100x30 terminal."""
    return RecordingSurface()


@pytest.fixture
def renderer(surface: RecordingSurface) -> LiveRenderer:
    """A fixed-layout renderer drawing onto the recording surface."""
    return LiveRenderer(surface)


@pytest.fixture
def sim() -> SimulatedTime:
    return SimulatedTime()


@pytest.fixture
def sink(sim: SimulatedTime) -> RecordingSink:
    return RecordingSink(sim)


@pytest.fixture
def notifier(sink: RecordingSink) -> Notifier:
    """A Notifier with a single recording sink."""
    n = Notifier()
    n.register_sink(sink)
    return n


@pytest.fixture
def fixed_now() -> Callable[[], datetime]:
    """Wall clock starting at 14:00 that moves 5 minutes per call."""
    state = {"t": datetime(2026, 3, 2, 14, 0, 0)}

    def _now() -> datetime:
        current = state["t"]
        state["t"] = current + timedelta(minutes=5)
        return current

    return _now


@pytest.fixture
def ledger(fixed_now: Callable[[], datetime]) -> SessionLedger:
    """A fresh SessionLedger stamped by the fixed wall clock."""
    return SessionLedger(now=fixed_now)


@pytest.fixture
def clock(renderer: LiveRenderer, notifier: Notifier, sim: SimulatedTime, surface: RecordingSurface) -> IntervalClock:
    """An IntervalClock on simulated time."""
    return IntervalClock(
        renderer,
        notifier,
        size_source=surface.get_size,
        monotonic=sim.monotonic,
    )


@pytest.fixture
def settings() -> FocusSettings:
    """Settings with short defaults so prompt fallbacks stay small."""
    return FocusSettings(default_work_minutes=0.05, default_break_minutes=0.05)


@pytest.fixture
def make_orchestrator(
    clock: IntervalClock,
    ledger: SessionLedger,
    sim: SimulatedTime,
    settings: FocusSettings,
) -> Callable[..., CycleOrchestrator]:
    """Factory fixture: build a CycleOrchestrator on simulated time.

    ``cancel_plan`` maps a zero-based interval number to the number of
    simulated seconds after which that interval is interrupted.
    """

    def _factory(
        cancel_plan: dict[int, float] | None = None,
        **config: Any,
    ) -> CycleOrchestrator:
        plan = dict(cancel_plan or {})
        created = {"n": 0}

        def _token() -> ScriptedToken:
            n = created["n"]
            created["n"] += 1
            return ScriptedToken(sim, plan.get(n))

        return CycleOrchestrator(
            SessionConfig(**config),
            clock,
            ledger=ledger,
            settings=settings,
            token_factory=_token,
        )

    return _factory
