"""Runtime settings: env-driven via pydantic-settings.

Reads from a ``.env`` file and ``FOCUSLOOP_*`` environment variables.
Command-line flags override these values.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.console import Console
from rich.logging import RichHandler

LOG_LEVELS: tuple[str, ...] = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class FocusSettings(BaseSettings):
    """User-level defaults with environment variable overrides.

    Examples
    --------
    Override via environment::

        export FOCUSLOOP_DEFAULT_WORK_MINUTES=50
        export FOCUSLOOP_SOUND_ENABLED=false
        export FOCUSLOOP_LOG_LEVEL=DEBUG
        export FOCUSLOOP_LOG_FILE=/tmp/focusloop.log

    Or via .env file::

        FOCUSLOOP_CENTERED_LAYOUT=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="FOCUSLOOP_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "WARNING"
    log_file: Path | None = None

    # Interval defaults (minutes)
    default_work_minutes: float = Field(default=25.0, gt=0)
    default_break_minutes: float = Field(default=5.0, gt=0)

    # Behaviour
    sound_enabled: bool = True
    centered_layout: bool = False
    auto_confirm: bool = False

    # Clock cadence
    tick_seconds: float = Field(default=1.0, gt=0)
    resize_poll_seconds: float = Field(default=0.5, gt=0)

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def default_work_seconds(self) -> int:
        return max(round(self.default_work_minutes * 60), 1)

    @property
    def default_break_seconds(self) -> int:
        return max(round(self.default_break_minutes * 60), 1)


def configure_logging(settings: FocusSettings, console: Console | None = None) -> logging.Handler:
    """Attach one handler to the ``focusloop`` logger at ``settings.log_level``.

    Log records go to ``settings.log_file`` when set, so they do not land in
    the middle of the live timer; otherwise to stderr through Rich.
    """
    if settings.log_file is not None:
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    else:
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=False,
        )

    package_logger = logging.getLogger("focusloop")
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
        existing.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(settings.log_level)
    return handler
