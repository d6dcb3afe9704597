"""Session configuration models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SessionConfig(BaseModel):
    """Already-validated configuration handed to the Cycle Orchestrator.

    ``work_seconds`` / ``break_seconds`` are ``None`` when the user gave no
    explicit value; the Orchestrator fills them in (or prompts) once.
    """

    model_config = ConfigDict(frozen=True)

    work_seconds: int | None = Field(default=None, gt=0)
    break_seconds: int | None = Field(default=None, gt=0)
    label: str = ""
    auto_confirm: bool = False
    sound_enabled: bool = True
    centered: bool = False

    @property
    def has_explicit_durations(self) -> bool:
        return self.work_seconds is not None or self.break_seconds is not None


class ResolvedDurations(BaseModel):
    """Work and break lengths, resolved once and reused for every cycle."""

    model_config = ConfigDict(frozen=True)

    work_seconds: int = Field(gt=0)
    break_seconds: int = Field(gt=0)
