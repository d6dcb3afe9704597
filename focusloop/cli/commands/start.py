"""``focusloop start [WORK] [BREAK] [NAME]``: run work/break cycles.

Durations may be given positionally, with ``--work`` / ``--break``, or via a
preset ``--template``.  Without any of these the user is asked once for
both lengths (unless ``--yes`` is set, in which case defaults are used).
"""

from __future__ import annotations

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from focusloop.cli.commands.templates_cmd import templates_table
from focusloop.config import FocusSettings, configure_logging
from focusloop.core.clock import IntervalClock
from focusloop.core.durations import VALID_FORMATS, DurationFormatError, parse_duration
from focusloop.core.orchestrator import CycleOrchestrator
from focusloop.display.recap import print_recap
from focusloop.display.renderer import LiveRenderer
from focusloop.display.surface import TerminalSurface
from focusloop.models.config import SessionConfig
from focusloop.models.templates import (
    UnknownTemplateError,
    get_template,
    suggest_template,
)
from focusloop.notify import default_notifier

console = Console(highlight=False)

EXIT_INTERRUPTED = 130


class TemplateConflictError(ValueError):
    """Raised when positional durations are combined with ``--template``."""


class InvalidDurationError(DurationFormatError):
    """A duration string that failed to parse, tagged with its option name."""

    def __init__(self, value: str, option: str) -> None:
        super().__init__(f"Invalid duration format '{value}'")
        self.value = value
        self.option = option


def _parse(value: str | None, option: str) -> int | None:
    try:
        return parse_duration(value)
    except DurationFormatError:
        raise InvalidDurationError(value or "", option) from None


def build_session_config(
    *,
    positionals: list[str],
    work: str | None = None,
    break_: str | None = None,
    name: str | None = None,
    template: str | None = None,
    minutes: float | None = None,
    auto_confirm: bool = False,
    no_sound: bool = False,
    centered: bool = False,
    settings: FocusSettings | None = None,
) -> SessionConfig:
    """Turn command-line values into a validated ``SessionConfig``.

    Flags win over positionals.  A template supplies work, break and label;
    explicit ``--work`` / ``--break`` / ``--name`` still override it.

    Raises
    ------
    TemplateConflictError
        Positional arguments were combined with ``--template``.
    UnknownTemplateError
        ``--template`` names no preset.
    InvalidDurationError
        A duration could not be parsed.
    """
    settings = settings or FocusSettings()
    work_seconds: int | None = None
    break_seconds: int | None = None
    label = ""

    if template:
        if positionals:
            raise TemplateConflictError("Cannot use positional arguments with --template")
        preset = get_template(template)
        work_seconds, break_seconds, label = (
            preset.work_seconds,
            preset.break_seconds,
            preset.display_name,
        )

    if work is not None:
        work_seconds = _parse(work, "work") or settings.default_work_seconds
    elif len(positionals) > 0:
        work_seconds = _parse(positionals[0], "work") or settings.default_work_seconds
    elif work_seconds is None and minutes is not None and minutes > 0:
        work_seconds = max(round(minutes * 60), 1)

    if break_ is not None:
        break_seconds = _parse(break_, "break") or settings.default_break_seconds
    elif len(positionals) > 1:
        break_seconds = _parse(positionals[1], "break") or settings.default_break_seconds

    if name:
        label = name
    elif len(positionals) > 2:
        label = positionals[2]

    return SessionConfig(
        work_seconds=work_seconds,
        break_seconds=break_seconds,
        label=label,
        auto_confirm=auto_confirm or settings.auto_confirm,
        sound_enabled=settings.sound_enabled and not no_sound,
        centered=centered or settings.centered_layout,
    )


# ---------------------------------------------------------------------------
# Error output
# ---------------------------------------------------------------------------


def print_template_error(name: str) -> None:
    console.print(f"[bold red]Error:[/bold red] Unknown template '{escape(name)}'")
    console.print()
    suggestion = suggest_template(name)
    if suggestion:
        console.print(f"Did you mean '[cyan]{suggestion}[/cyan]'?")
        console.print()

    console.print(templates_table(marked=suggestion))
    console.print("[dim]Use 'focusloop templates' to list all templates.[/dim]")
    console.print("[dim]Example: focusloop start -t focus[/dim]")


def print_settings_error(exc: ValidationError) -> None:
    console.print("[bold red]Error:[/bold red] Invalid settings")
    for error in exc.errors():
        field = "_".join(str(part) for part in error["loc"]).upper()
        console.print(f"  • FOCUSLOOP_{field}: {escape(error['msg'])}")


def print_duration_error(value: str, option: str) -> None:
    console.print(f"[bold red]Error:[/bold red] Invalid duration format '{escape(value)}'")
    console.print()
    console.print("Valid formats:")
    for example, meaning in VALID_FORMATS:
        console.print(f"  • {example:<8} ({meaning})")
    console.print()
    console.print(f"Example: --{option} 25m")


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


def start_cmd(
    positionals: list[str] = typer.Argument(
        None,
        metavar="[WORK] [BREAK] [NAME]",
        help="Work duration, break duration and session name.",
        show_default=False,
    ),
    work: str = typer.Option(None, "--work", "-w", help="Work duration (e.g. 5m, 30m, 1h30m)."),
    break_: str = typer.Option(None, "--break", "-b", help="Break duration (e.g. 1m, 10m, 30s)."),
    name: str = typer.Option(None, "--name", "-n", help="Custom name for work sessions."),
    template: str = typer.Option(
        None, "--template", "-t", help="Use a preset template (deep-work, sprint, focus, study)."
    ),
    minutes: float = typer.Option(
        None, "--minutes", "-m", help="Work duration in minutes when no other duration is given."
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Auto-confirm prompts (for scripting)."),
    no_sound: bool = typer.Option(False, "--no-sound", help="Disable completion notifications."),
    centered: bool = typer.Option(False, "--centered", help="Center the timer in the terminal."),
    cycles: int = typer.Option(
        None, "--cycles", min=1, help="Stop after this many work/break cycles."
    ),
) -> None:
    """Run work/break cycles until cancelled (Ctrl+C) or declined."""
    try:
        settings = FocusSettings()
    except ValidationError as exc:
        print_settings_error(exc)
        raise typer.Exit(code=1)
    configure_logging(settings)

    try:
        session = build_session_config(
            positionals=list(positionals or []),
            work=work,
            break_=break_,
            name=name,
            template=template,
            minutes=minutes,
            auto_confirm=yes,
            no_sound=no_sound,
            centered=centered,
            settings=settings,
        )
    except TemplateConflictError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        console.print("[dim]Use 'focusloop templates' to list available templates.[/dim]")
        raise typer.Exit(code=1)
    except UnknownTemplateError:
        print_template_error(template or "")
        raise typer.Exit(code=1)
    except InvalidDurationError as exc:
        print_duration_error(exc.value, exc.option)
        raise typer.Exit(code=1)

    surface = TerminalSurface(console)
    renderer = LiveRenderer(surface, centered=session.centered)
    clock = IntervalClock(
        renderer,
        default_notifier(enabled=session.sound_enabled, console=console),
        size_source=surface.get_size,
        tick_seconds=settings.tick_seconds,
        resize_poll_seconds=settings.resize_poll_seconds,
    )
    orchestrator = CycleOrchestrator(session, clock, settings=settings)

    interrupted = False
    try:
        snapshot = orchestrator.run(max_cycles=cycles)
    except KeyboardInterrupt:
        # Ctrl+C outside a running interval, e.g. at a prompt
        interrupted = True
        snapshot = orchestrator.ledger.snapshot()
    finally:
        surface.set_cursor_visible(True)

    print_recap(console, snapshot)
    if interrupted:
        raise typer.Exit(code=EXIT_INTERRUPTED)
