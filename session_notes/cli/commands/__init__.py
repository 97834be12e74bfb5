"""
CLI Commands.

Organized by domain/feature area.
"""

from session_notes.cli.commands.notes import add, delete, list_notes

__all__ = [
    "add",
    "delete",
    "list_notes",
]
