"""CLI entry point for gitscribe.

This module provides the main CLI application that combines all commands
into a single unified interface.
"""

import typer

from gitscribe import __version__
from gitscribe.cli.commit import commit_command

# Main application
app = typer.Typer(
    name="gitscribe",
    help="gitscribe: AI-powered git commit message generator",
    add_completion=False,
    no_args_is_help=True,
)

app.command("commit")(commit_command)


@app.command("version")
def version_command() -> None:
    """Show the gitscribe version."""
    typer.echo(f"gitscribe {__version__}")


__all__ = [
    "app",
    "commit_command",
    "version_command",
]
