"""
Session Note Commands.

List, add and delete session notes. Each command opens the application
for its own duration and renders the store's state with Rich.
"""

import asyncio
from datetime import datetime

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from session_notes.backend.core.exceptions import StructuralValidationError
from session_notes.backend.main import note_app
from session_notes.backend.schemas.note import SessionNote, SessionNoteDraft

console = Console()

PREVIEW_LENGTH = 60


def _truncate(text: str, max_length: int = PREVIEW_LENGTH) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def _display_notes(notes: list[SessionNote] | tuple[SessionNote, ...]) -> None:
    """Render notes as a table, newest session first."""
    if not notes:
        console.print("[dim]No session notes yet. Add one with: session-notes add[/dim]")
        return

    table = Table(title="Session Notes", show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Client")
    table.add_column("Duration", justify="right")
    table.add_column("Notes")

    for note in notes:
        table.add_row(
            note.id,
            note.session_date.strftime("%b %d, %Y"),
            note.client_name,
            f"{note.duration_minutes} min",
            _truncate(note.notes),
        )

    console.print(table)


def _display_note(note: SessionNote, title: str) -> None:
    console.print(Panel(
        f"[bold]{note.client_name}[/bold]  {note.session_date.isoformat()}  "
        f"{note.duration_minutes} min\n\n{note.notes}",
        title=title,
        subtitle=f"[dim]{note.id}[/dim]",
    ))


def list_notes() -> None:
    """
    Show every session note, newest session first.

    Examples:
        session-notes list
    """
    asyncio.run(_list())


async def _list() -> None:
    async with note_app(configure_logging=False) as notes_app:
        result = await notes_app.store.load()
        if not result.ok:
            console.print(f"[red]Error: {result.error.message}[/red]")
            raise typer.Exit(1)
        _display_notes(notes_app.store.notes)


def add(
    client: str = typer.Option(..., "--client", "-c", help="Client name"),
    session_date: datetime = typer.Option(
        ..., "--date", "-D", formats=["%Y-%m-%d"], help="Session date (YYYY-MM-DD)"
    ),
    notes: str = typer.Option(..., "--notes", "-n", help="Session notes (max 500 characters)"),
    duration: int = typer.Option(60, "--duration", "-m", help="Duration in minutes (1-300)"),
) -> None:
    """
    Validate and save a new session note.

    Examples:
        session-notes add -c "Jane Doe" -D 2024-01-15 -n "Discussed coping strategies." -m 50
    """
    draft = SessionNoteDraft(
        client_name=client,
        session_date=session_date.date(),
        notes=notes,
        duration_minutes=duration,
    )
    asyncio.run(_add(draft))


async def _add(draft: SessionNoteDraft) -> None:
    async with note_app(configure_logging=False) as notes_app:
        result = await notes_app.pipeline.submit(draft)

    if result.ok:
        console.print("[green]✓ Session note added successfully![/green]")
        _display_note(result.value, "New note")
        return

    error = result.error
    if isinstance(error, StructuralValidationError):
        console.print(f"[red]{error.message}:[/red]")
        for field, message in error.details.items():
            console.print(f"  [yellow]{field}[/yellow]: {message}")
    else:
        console.print(f"[red]Error: {error.message}[/red]")
    raise typer.Exit(1)


def delete(
    note_id: str = typer.Argument(..., help="ID of the note to delete"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """
    Delete a session note after confirmation.

    Examples:
        session-notes delete 3f1c...
        session-notes delete 3f1c... --yes
    """
    asyncio.run(_delete(note_id, yes))


async def _delete(note_id: str, yes: bool) -> None:
    async with note_app(configure_logging=False) as notes_app:
        loaded = await notes_app.store.load()
        if not loaded.ok:
            console.print(f"[red]Error: {loaded.error.message}[/red]")
            raise typer.Exit(1)

        deletion = notes_app.deletion
        if not deletion.request_delete(note_id):
            console.print(f"[yellow]No session note with id {note_id}[/yellow]")
            raise typer.Exit(1)

        _display_note(deletion.pending_target, "Delete this note?")
        if not yes and not typer.confirm("This action cannot be undone. Delete?"):
            deletion.cancel()
            console.print("[dim]Cancelled[/dim]")
            return

        result = await deletion.confirm_delete()

    if result is not None and result.ok:
        console.print("[green]✓ Note deleted successfully[/green]")
        return

    message = result.error.message if result is not None else "Failed to delete note"
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)
