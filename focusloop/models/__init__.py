"""focusloop data models: all Pydantic v2, all frozen (immutable)."""

from focusloop.models.config import ResolvedDurations, SessionConfig
from focusloop.models.intervals import (
    VALID_OUTCOME_TRANSITIONS,
    Interval,
    IntervalKind,
    IntervalOutcome,
    LedgerSnapshot,
)
from focusloop.models.notifications import (
    BREAK_COMPLETE,
    COMPLETION_NOTIFICATIONS,
    WORK_COMPLETE,
    Notification,
)
from focusloop.models.render import RenderState
from focusloop.models.templates import (
    DEFAULT_TEMPLATES,
    SessionTemplate,
    UnknownTemplateError,
    get_template,
    suggest_template,
)

__all__ = [
    # config
    "SessionConfig",
    "ResolvedDurations",
    # intervals
    "IntervalKind",
    "IntervalOutcome",
    "VALID_OUTCOME_TRANSITIONS",
    "Interval",
    "LedgerSnapshot",
    # notifications
    "Notification",
    "WORK_COMPLETE",
    "BREAK_COMPLETE",
    "COMPLETION_NOTIFICATIONS",
    # render
    "RenderState",
    # templates
    "SessionTemplate",
    "DEFAULT_TEMPLATES",
    "UnknownTemplateError",
    "get_template",
    "suggest_template",
]
