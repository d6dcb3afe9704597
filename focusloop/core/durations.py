"""Duration strings: ``25m``, ``1h30m``, ``30s``, ``1.5h`` or a bare number of minutes."""

from __future__ import annotations

import math
import re

_UNIT_SECONDS: dict[str, float] = {
    "ms": 0.001,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ms|h|m|s)")
_FULL = re.compile(r"(?:(?:\d+(?:\.\d*)?|\.\d+)(?:ms|h|m|s))+")
_BARE_MINUTES = re.compile(r"\d+(?:\.\d*)?|\.\d+")

VALID_FORMATS: tuple[tuple[str, str], ...] = (
    ("25m", "minutes"),
    ("1h30m", "hours and minutes"),
    ("30s", "seconds only"),
    ("1h", "hours only"),
)


class DurationFormatError(ValueError):
    """Raised when a duration string cannot be parsed."""


def parse_duration(text: str | None) -> int | None:
    """Parse *text* into whole seconds.

    Returns None for an empty string or a zero duration, meaning "use the
    default".  A bare number is read as minutes.  Fractions of a second are
    rounded up so a non-zero duration never becomes zero.

    Raises
    ------
    DurationFormatError
        If *text* is neither a unit string nor a number.
    """
    if text is None:
        return None
    value = text.strip().lower()
    if not value:
        return None

    if _FULL.fullmatch(value):
        seconds = sum(
            float(number) * _UNIT_SECONDS[unit] for number, unit in _COMPONENT.findall(value)
        )
    elif _BARE_MINUTES.fullmatch(value):
        seconds = float(value) * 60.0
    else:
        raise DurationFormatError(f"Invalid duration format '{text}'")

    if seconds <= 0:
        return None
    return max(math.ceil(round(seconds, 6)), 1)
