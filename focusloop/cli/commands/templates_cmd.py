"""``focusloop templates``: list the preset work/break templates."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from focusloop.models.templates import DEFAULT_TEMPLATES

console = Console()


def templates_table(marked: str | None = None) -> Table:
    """Table of every preset; the row for *marked* gets a ``←`` pointer."""
    table = Table(title="Available templates", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="cyan")
    table.add_column("Work", justify="right")
    table.add_column("Break", justify="right")
    table.add_column("Description")

    for key, preset in DEFAULT_TEMPLATES.items():
        table.add_row(
            key + ("  ←" if key == marked else ""),
            f"{preset.work_minutes}m",
            f"{preset.break_minutes}m",
            preset.display_name,
        )
    return table


def templates_cmd() -> None:
    """List available templates."""
    console.print(templates_table())
    console.print()
    console.print("[dim]Usage: focusloop start -t <template>[/dim]")
    console.print("[dim]Example: focusloop start -t deep-work[/dim]")
