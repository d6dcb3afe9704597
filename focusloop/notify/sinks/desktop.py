"""Desktop notification sink: ``notify-send`` on Linux, ``osascript`` on macOS.

The helper process is started and not waited on, so a slow notification
daemon never stalls the tick loop.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess

from focusloop.models.notifications import Notification
from focusloop.notify.sinks import NotificationUnavailableError

logger = logging.getLogger(__name__)


def _applescript_quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def build_command(notification: Notification, system: str | None = None) -> list[str]:
    """Return the argv that shows *notification* on *system*.

    Raises
    ------
    NotificationUnavailableError
        If the platform has no supported notification command.
    """
    system = system or platform.system()
    if system == "Linux":
        return ["notify-send", notification.title, notification.message]
    if system == "Darwin":
        script = (
            f"display notification {_applescript_quote(notification.message)} "
            f"with title {_applescript_quote(notification.title)} sound name \"Glass\""
        )
        return ["osascript", "-e", script]
    raise NotificationUnavailableError(f"No desktop notification command for {system}")


class DesktopSink:
    """Shows a native desktop notification via a helper command."""

    def __init__(self, system: str | None = None) -> None:
        self._system = system or platform.system()

    @property
    def sink_name(self) -> str:
        return "desktop"

    def deliver(self, notification: Notification) -> None:
        cmd = build_command(notification, self._system)
        if shutil.which(cmd[0]) is None:
            raise NotificationUnavailableError(f"{cmd[0]} not found on PATH")
        subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        logger.debug("DesktopSink: launched %s for %r", cmd[0], notification.title)
