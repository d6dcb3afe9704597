"""focusloop CLI: Typer-based command-line interface.

Provides the ``focusloop`` command with subcommands for running work/break
cycles and listing preset templates.

All output uses Rich for formatted terminal display.
"""
