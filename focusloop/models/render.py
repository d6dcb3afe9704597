"""Ephemeral render state passed to the Live Renderer on every frame."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from focusloop.models.intervals import IntervalKind


class RenderState(BaseModel):
    """Everything a single frame needs.  Recomputed every tick, never stored."""

    model_config = ConfigDict(frozen=True)

    elapsed_seconds: int = Field(default=0, ge=0)
    total_seconds: int = Field(default=0, ge=0)
    terminal_width: int = Field(default=80, gt=0)
    terminal_height: int = Field(default=24, gt=0)
    kind: IntervalKind = IntervalKind.WORK
    cycle_number: int = Field(default=1, ge=1)
    label: str = "WORK"
    message: str = ""

    @property
    def remaining_seconds(self) -> int:
        return max(self.total_seconds - self.elapsed_seconds, 0)

    @property
    def terminal_size(self) -> tuple[int, int]:
        return self.terminal_width, self.terminal_height
