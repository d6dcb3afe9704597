"""Completion notifications: the ``Notifier`` dispatcher and its sinks."""

from __future__ import annotations

from rich.console import Console

from focusloop.notify.dispatcher import Notifier
from focusloop.notify.sinks.bell import TerminalBellSink
from focusloop.notify.sinks.desktop import DesktopSink


def default_notifier(*, enabled: bool = True, console: Console | None = None) -> Notifier:
    """Notifier wired with the desktop and terminal-bell sinks."""
    notifier = Notifier(enabled=enabled)
    notifier.register_sink(DesktopSink())
    notifier.register_sink(TerminalBellSink(console))
    return notifier


__all__ = ["Notifier", "DesktopSink", "TerminalBellSink", "default_notifier"]
