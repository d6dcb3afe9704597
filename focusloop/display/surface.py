"""Drawing surface: the only place that talks to the real terminal.

The Live Renderer draws exclusively through the ``DrawingSurface`` protocol
so it can be exercised without a terminal: tests substitute a recording
surface and assert on the sequence of draw calls, not on escape bytes.

``TerminalSurface`` implements the protocol on top of a Rich ``Console``
using ``rich.control.Control`` for cursor movement and visibility.
"""

from __future__ import annotations

import logging
import shutil
from typing import IO, Protocol, runtime_checkable

from rich.console import Console
from rich.control import Control
from rich.text import Text

logger = logging.getLogger(__name__)

FALLBACK_SIZE: tuple[int, int] = (80, 24)


def terminal_size() -> tuple[int, int]:
    """Return ``(columns, lines)`` of the controlling terminal, or 80x24."""
    try:
        size = shutil.get_terminal_size(fallback=FALLBACK_SIZE)
    except (OSError, ValueError):
        return FALLBACK_SIZE
    if size.columns <= 0 or size.lines <= 0:
        return FALLBACK_SIZE
    return size.columns, size.lines


@runtime_checkable
class DrawingSurface(Protocol):
    """Minimal terminal drawing interface used by the Live Renderer.

    Rows and columns are zero-based, measured from the top-left corner.
    """

    def move_cursor(self, row: int, col: int) -> None:
        """Move the cursor to (*row*, *col*)."""
        ...

    def clear_region(self, row: int, col: int, width: int) -> None:
        """Blank *width* cells starting at (*row*, *col*)."""
        ...

    def write_styled(self, text: Text | str) -> None:
        """Write *text* at the cursor, honouring any Rich styles it carries."""
        ...

    def clear_screen(self) -> None:
        """Erase the whole screen and home the cursor."""
        ...

    def set_cursor_visible(self, visible: bool) -> None:
        """Show or hide the terminal cursor."""
        ...

    def read_line(self) -> str | None:
        """Read one line of input; None on end-of-stream or read failure."""
        ...

    def get_size(self) -> tuple[int, int]:
        """Return ``(width, height)`` of the drawable area."""
        ...


class TerminalSurface:
    """``DrawingSurface`` backed by a Rich Console.

    Parameters
    ----------
    console:
        Rich Console to draw to.  A new one writing to stdout is created if
        not provided.
    stdin:
        Stream to read prompt answers from.  ``None`` uses the builtin
        ``input()`` (via ``Console.input``), which keeps readline editing.
    """

    def __init__(self, console: Console | None = None, stdin: IO[str] | None = None) -> None:
        self.console = console or Console(highlight=False)
        self._stdin = stdin

    def move_cursor(self, row: int, col: int) -> None:
        self.console.control(Control.move_to(max(col, 0), max(row, 0)))

    def clear_region(self, row: int, col: int, width: int) -> None:
        if width <= 0:
            return
        self.move_cursor(row, col)
        self.console.out(" " * width, end="", highlight=False)
        self.move_cursor(row, col)

    def write_styled(self, text: Text | str) -> None:
        self.console.print(text, end="", soft_wrap=True, markup=False, highlight=False)

    def clear_screen(self) -> None:
        self.console.control(Control.clear(), Control.home())

    def set_cursor_visible(self, visible: bool) -> None:
        self.console.show_cursor(visible)

    def read_line(self) -> str | None:
        try:
            line = self.console.input(stream=self._stdin)
        except (EOFError, OSError) as exc:
            logger.debug("Prompt read failed (%s); using default", type(exc).__name__)
            return None
        if self._stdin is not None and line == "":
            # readline() returns "" only at end-of-stream
            return None
        return line.rstrip("\r\n")

    def get_size(self) -> tuple[int, int]:
        return terminal_size()
