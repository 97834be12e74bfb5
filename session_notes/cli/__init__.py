"""
CLI Client Module.

Command-line client built with Typer for listing, adding and deleting
session notes.

Architecture:
- CLI is a thin presentation layer
- All behavior lives in the note store and creation pipeline
- Rich renders tables and messages

Usage:
    session-notes --help
    session-notes list
    session-notes add --client "Jane Doe" --date 2024-01-15 --notes "..." --duration 50
    session-notes delete <id>
"""
