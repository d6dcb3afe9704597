"""Main Typer application: imports and registers all CLI commands.

Entry point: ``focusloop`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import typer

from focusloop import __version__
from focusloop.cli.commands.start import start_cmd
from focusloop.cli.commands.templates_cmd import templates_cmd

app = typer.Typer(
    name="focusloop",
    help="focusloop: a terminal work/break interval timer.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="start", help="Run work/break cycles.")(start_cmd)
app.command(name="templates", help="List preset work/break templates.")(templates_cmd)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"focusloop {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """focusloop: a terminal work/break interval timer."""


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
