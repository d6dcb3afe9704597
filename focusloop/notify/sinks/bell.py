"""Terminal bell sink: rings the console bell when an interval completes."""

from __future__ import annotations

from rich.console import Console

from focusloop.models.notifications import Notification


class TerminalBellSink:
    """Rings the terminal bell (``BEL``) through a Rich Console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    @property
    def sink_name(self) -> str:
        return "bell"

    def deliver(self, notification: Notification) -> None:
        self._console.bell()
