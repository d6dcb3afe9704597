"""Live Renderer: draws the timer box, gradient progress bar and time left.

Every draw method takes a ``RenderState`` and recomputes the layout from it;
the renderer keeps no per-interval state of its own.  All output goes
through a ``DrawingSurface``.

Layout (rows relative to the anchor)::

    0  [WORK Cycle 1]
    1  ┌───────────────────────────────────────────────────────────────┐
    2  │ [█████████░░░░░░░░░░░░░░░░░░░░░░░░░░]  26%       18m 30s left │
    3  └───────────────────────────────────────────────────────────────┘
    4
    5  message line ("Time for a break!", cancellation notice)
    6  prompt line ("Continue with another cycle? [Y/n]: ")

The anchor is the top-left corner in the fixed layout, or the position that
centers the block in the terminal in the centered layout.
"""

from __future__ import annotations

import math

from rich.color import Color
from rich.style import Style
from rich.text import Text

from focusloop.display.surface import DrawingSurface
from focusloop.models.intervals import IntervalKind
from focusloop.models.render import RenderState

RGB = tuple[int, int, int]

# ---------------------------------------------------------------------------
# Bar and layout constants
# ---------------------------------------------------------------------------

BAR_WIDTH = 35
FILLED_GLYPH = "█"
EMPTY_GLYPH = "░"

GRADIENTS: dict[IntervalKind, tuple[RGB, RGB]] = {
    IntervalKind.WORK: ((139, 92, 246), (59, 130, 246)),  # purple -> blue
    IntervalKind.BREAK: ((251, 146, 60), (239, 68, 68)),  # orange -> red
}

BOX_WIDTH = 71
INNER_WIDTH = BOX_WIDTH - 2

LABEL_ROW = 0
BOX_TOP_ROW = 1
BAR_ROW = 2
BOX_BOTTOM_ROW = 3
MESSAGE_ROW = 5
PROMPT_ROW = 6
LAYOUT_HEIGHT = 7

BAR_COL = 2
TIME_COL = 56

BREAK_MESSAGE = "Time for a break!"
CONTINUE_PROMPT = "Continue with another cycle? [Y/n]: "
NEGATIVE_ANSWERS = frozenset({"n", "no"})


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def progress_fraction(elapsed_seconds: int, total_seconds: int) -> float:
    """Fraction of the interval done, clamped to [0, 1]."""
    if total_seconds <= 0:
        return 1.0
    return min(max(elapsed_seconds / total_seconds, 0.0), 1.0)


def filled_cells(fraction: float, width: int = BAR_WIDTH) -> int:
    """Number of filled bar cells for *fraction*; saturates at *width*."""
    return min(max(math.floor(fraction * width), 0), width)


def interpolate_color(start: RGB, end: RGB, fraction: float) -> RGB:
    """Linear interpolation between two RGB colors at *fraction* in [0, 1]."""
    return tuple(  # type: ignore[return-value]
        round(s + (e - s) * fraction) for s, e in zip(start, end)
    )


def build_progress_bar(fraction: float, kind: IntervalKind, width: int = BAR_WIDTH) -> Text:
    """Bracketed bar whose filled cells follow the kind's color gradient."""
    start, end = GRADIENTS[kind]
    filled = filled_cells(fraction, width)

    bar = Text("[")
    for i in range(filled):
        r, g, b = interpolate_color(start, end, i / width)
        bar.append(FILLED_GLYPH, style=Style(color=Color.from_rgb(r, g, b)))
    bar.append(EMPTY_GLYPH * (width - filled), style="dim")
    bar.append("]")
    return bar


def format_time_left(remaining_seconds: int) -> str:
    minutes, seconds = divmod(max(remaining_seconds, 0), 60)
    return f"{minutes}m {seconds:02d}s left"


def layout_anchor(width: int, height: int, centered: bool) -> tuple[int, int]:
    """Top-left ``(row, col)`` of the timer block for a terminal size."""
    if not centered:
        return 0, 0
    return max((height - LAYOUT_HEIGHT) // 2, 0), max((width - BOX_WIDTH) // 2, 0)


def wants_to_continue(answer: str | None) -> bool:
    """Interpret a continue-prompt answer; only an explicit no stops the loop."""
    if answer is None:
        return True
    return answer.strip().lower() not in NEGATIVE_ANSWERS


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class LiveRenderer:
    """Draws ``RenderState`` frames onto a ``DrawingSurface``.

    Parameters
    ----------
    surface:
        Where to draw.
    centered:
        Center the block in the terminal instead of anchoring it top-left.
        The anchor is recomputed from each state's terminal size, so the
        block re-centers after a resize.
    """

    def __init__(self, surface: DrawingSurface, *, centered: bool = False) -> None:
        self.surface = surface
        self.centered = centered

    def anchor(self, state: RenderState) -> tuple[int, int]:
        return layout_anchor(state.terminal_width, state.terminal_height, self.centered)

    # ------------------------------------------------------------------
    # Interval lifecycle
    # ------------------------------------------------------------------

    def begin(self, state: RenderState) -> None:
        """Hide the cursor and draw the first full frame."""
        self.surface.set_cursor_visible(False)
        self.draw_header(state)
        self.draw_progress(state)

    def end(self) -> None:
        """Make the cursor visible again.  Safe to call more than once."""
        self.surface.set_cursor_visible(True)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def draw_header(self, state: RenderState) -> None:
        """Clear the screen and draw the label line, the empty box and any message."""
        row, col = self.anchor(state)
        border = Style(color=Color.from_rgb(*GRADIENTS[state.kind][0]))

        self.surface.clear_screen()
        self.surface.move_cursor(row + LABEL_ROW, col)
        self.surface.write_styled(
            Text(f"[{state.label} Cycle {state.cycle_number}]", style="bold")
        )
        self.surface.move_cursor(row + BOX_TOP_ROW, col)
        self.surface.write_styled(Text("┌" + "─" * INNER_WIDTH + "┐", style=border))
        self.surface.move_cursor(row + BAR_ROW, col)
        self.surface.write_styled(Text("│" + " " * INNER_WIDTH + "│", style=border))
        self.surface.move_cursor(row + BOX_BOTTOM_ROW, col)
        self.surface.write_styled(Text("└" + "─" * INNER_WIDTH + "┘", style=border))
        if state.message:
            self.surface.move_cursor(row + MESSAGE_ROW, col)
            self.surface.write_styled(Text(state.message, style="bold"))

    def draw_progress(self, state: RenderState) -> None:
        """Redraw the bar, percentage and time left inside the box."""
        row, col = self.anchor(state)
        fraction = progress_fraction(state.elapsed_seconds, state.total_seconds)

        self.surface.clear_region(row + BAR_ROW, col + 1, INNER_WIDTH)
        self.surface.move_cursor(row + BAR_ROW, col + BAR_COL)
        bar = build_progress_bar(fraction, state.kind)
        bar.append(f"  {fraction * 100:.0f}%")
        self.surface.write_styled(bar)

        self.surface.move_cursor(row + BAR_ROW, col + TIME_COL)
        self.surface.write_styled(Text(format_time_left(state.remaining_seconds), style="bold"))

    # ------------------------------------------------------------------
    # Messages and prompts
    # ------------------------------------------------------------------

    def display_message(self, state: RenderState, message: str, style: str = "") -> None:
        row, col = self.anchor(state)
        self.surface.clear_region(row + MESSAGE_ROW, col, BOX_WIDTH)
        self.surface.move_cursor(row + MESSAGE_ROW, col)
        self.surface.write_styled(Text(message, style=style))

    def clear_message(self, state: RenderState) -> None:
        row, col = self.anchor(state)
        self.surface.clear_region(row + MESSAGE_ROW, col, BOX_WIDTH)

    def show_cancelled(self, state: RenderState) -> None:
        self.display_message(
            state, f"{state.label} Cycle {state.cycle_number} cancelled", style="bold red"
        )

    def prompt_continue(self, state: RenderState) -> bool:
        """Ask whether to run another cycle.

        The cursor is revealed while reading and hidden again before
        returning.  Anything but ``n``/``no`` (including end-of-input)
        means yes.
        """
        row, col = self.anchor(state)
        self.surface.clear_region(row + PROMPT_ROW, col, BOX_WIDTH)
        self.surface.move_cursor(row + PROMPT_ROW, col)
        self.surface.write_styled(CONTINUE_PROMPT)
        self.surface.set_cursor_visible(True)
        try:
            answer = self.surface.read_line()
        finally:
            self.surface.set_cursor_visible(False)
        self.surface.clear_region(row + PROMPT_ROW, col, BOX_WIDTH)
        return wants_to_continue(answer)

    def park_cursor(self, state: RenderState) -> None:
        """Move the cursor below the block so following output does not overlap it."""
        row, _ = self.anchor(state)
        self.surface.move_cursor(row + LAYOUT_HEIGHT, 0)
