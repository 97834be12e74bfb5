"""
CLI Client.

Command-line client for session notes.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    session-notes --help                 # Show help
    session-notes list                   # List notes, newest session first
    session-notes add -c NAME -D DATE -n TEXT -m MINUTES
    session-notes delete ID [--yes]      # Delete after confirmation

Options:
    --verbose, -v     Enable verbose output
    --debug, -d       Enable debug mode (detailed logging)
    --help            Show help message
"""

import typer
from rich.console import Console

from session_notes.backend.core.config import find_project_root
from session_notes.cli.commands import add, delete, list_notes

app = typer.Typer(
    name="session-notes",
    help="Session Notes CLI - record, list and delete session notes.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.command("list")(list_notes)
app.command("add")(add)
app.command("delete")(delete)


def _validate_project_root() -> None:
    """Validate that we're running inside the project."""
    try:
        find_project_root()
    except RuntimeError:
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Session Notes CLI.

    Notes are validated by the remote validation service before they are saved.
    """
    _validate_project_root()

    from session_notes.backend.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console", enable_console=True)
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console", enable_console=True)
    else:
        setup_logging()


if __name__ == "__main__":
    app()
