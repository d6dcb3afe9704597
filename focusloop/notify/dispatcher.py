"""Notifier: fans completion notifications out to ALL registered sinks.

Notifications are fire-and-forget: a failing sink is logged as a warning
and never interrupts the interval that triggered it.  Nothing raised by a
sink reaches the caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from focusloop.models.intervals import IntervalKind
from focusloop.models.notifications import (
    BREAK_COMPLETE,
    COMPLETION_NOTIFICATIONS,
    WORK_COMPLETE,
    Notification,
)

if TYPE_CHECKING:
    from focusloop.notify.sinks import NotificationSink

logger = logging.getLogger(__name__)


class Notifier:
    """Routes notifications to every registered sink.

    Parameters
    ----------
    enabled:
        When False, ``dispatch`` delivers nothing (``--no-sound``).

    Usage
    -----
    >>> notifier = Notifier()
    >>> notifier.register_sink(DesktopSink())
    >>> notifier.notify_work_complete()
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self.enabled = enabled
        self._sinks: list[NotificationSink] = []

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    def register_sink(self, sink: NotificationSink) -> None:
        """Register a sink.  Duplicate registration is silently ignored."""
        if sink not in self._sinks:
            self._sinks.append(sink)
            logger.debug("Registered notification sink: %s", sink.sink_name)

    def unregister_sink(self, sink: NotificationSink) -> None:
        try:
            self._sinks.remove(sink)
        except ValueError:
            pass

    @property
    def registered_sinks(self) -> list[NotificationSink]:
        return list(self._sinks)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, notification: Notification) -> list[str]:
        """Deliver *notification* to all sinks; return the names that succeeded."""
        if not self.enabled:
            logger.debug("Notifications disabled; skipping %r", notification.title)
            return []
        if not self._sinks:
            logger.debug("No notification sinks registered; %r dropped", notification.title)
            return []

        succeeded: list[str] = []
        for sink in self._sinks:
            try:
                sink.deliver(notification)
                succeeded.append(sink.sink_name)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "Notification sink %s failed for %r: %s",
                    sink.sink_name,
                    notification.title,
                    exc,
                )
        return succeeded

    def notify_complete(self, kind: IntervalKind) -> list[str]:
        return self.dispatch(COMPLETION_NOTIFICATIONS[kind])

    def notify_work_complete(self) -> list[str]:
        return self.dispatch(WORK_COMPLETE)

    def notify_break_complete(self) -> list[str]:
        return self.dispatch(BREAK_COMPLETE)
