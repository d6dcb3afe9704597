"""Completion notification payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from focusloop.models.intervals import IntervalKind


class Notification(BaseModel):
    """A desktop/terminal notification emitted when an interval finishes."""

    model_config = ConfigDict(frozen=True)

    title: str
    message: str
    kind: IntervalKind


WORK_COMPLETE = Notification(
    title="Work Complete",
    message="Time for a break!",
    kind=IntervalKind.WORK,
)

BREAK_COMPLETE = Notification(
    title="Break Complete",
    message="Ready for another session?",
    kind=IntervalKind.BREAK,
)

COMPLETION_NOTIFICATIONS: dict[IntervalKind, Notification] = {
    IntervalKind.WORK: WORK_COMPLETE,
    IntervalKind.BREAK: BREAK_COMPLETE,
}
