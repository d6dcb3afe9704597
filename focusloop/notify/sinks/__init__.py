"""Sink protocol for completion notifications.

All sinks implement the ``NotificationSink`` protocol: a ``sink_name``
property and a ``deliver(notification)`` method.  The ``Notifier`` calls
``deliver`` on every registered sink for every notification.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from focusloop.models.notifications import Notification


class NotificationUnavailableError(RuntimeError):
    """Raised by a sink that has no way to deliver on this platform."""


@runtime_checkable
class NotificationSink(Protocol):
    """Protocol that every notification sink must implement.

    Attributes
    ----------
    sink_name : str
        A unique human-readable identifier for this sink instance
        (e.g. ``"desktop"``, ``"bell"``).
    """

    @property
    def sink_name(self) -> str:
        """Return the unique name of this sink."""
        ...

    def deliver(self, notification: Notification) -> None:
        """Deliver *notification*.

        Implementations must return promptly; the Interval Clock calls the
        notifier from inside its tick loop.  Failures may raise; the
        ``Notifier`` logs them and moves on to the next sink.
        """
        ...
