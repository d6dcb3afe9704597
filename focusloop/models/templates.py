"""Preset work/break templates (``focusloop start --template deep-work``)."""

from __future__ import annotations

import difflib

from pydantic import BaseModel, ConfigDict, Field


class UnknownTemplateError(KeyError):
    """Raised when a template name does not match any preset."""


class SessionTemplate(BaseModel):
    """A named work/break pairing."""

    model_config = ConfigDict(frozen=True)

    key: str
    display_name: str
    work_seconds: int = Field(gt=0)
    break_seconds: int = Field(gt=0)

    @property
    def work_minutes(self) -> int:
        return self.work_seconds // 60

    @property
    def break_minutes(self) -> int:
        return self.break_seconds // 60


# The standard focusloop templates, in display order.
DEFAULT_TEMPLATES: dict[str, SessionTemplate] = {
    t.key: t
    for t in (
        SessionTemplate(key="deep-work", display_name="Deep Work", work_seconds=50 * 60, break_seconds=10 * 60),
        SessionTemplate(key="sprint", display_name="Sprint", work_seconds=15 * 60, break_seconds=3 * 60),
        SessionTemplate(key="focus", display_name="Focus", work_seconds=25 * 60, break_seconds=5 * 60),
        SessionTemplate(key="study", display_name="Study", work_seconds=45 * 60, break_seconds=15 * 60),
    )
}


def get_template(name: str) -> SessionTemplate:
    """Look up a template by key, case-insensitively."""
    try:
        return DEFAULT_TEMPLATES[name.strip().lower()]
    except KeyError:
        raise UnknownTemplateError(name) from None


def suggest_template(name: str) -> str | None:
    """Return the closest template key to *name*, or None if nothing is close."""
    matches = difflib.get_close_matches(
        name.strip().lower(), list(DEFAULT_TEMPLATES), n=1, cutoff=0.4
    )
    return matches[0] if matches else None
