"""
Session Notes.

- backend/: Note store, creation pipeline, remote service adapters, configuration
- cli/: Command-line client (Typer + Rich)
"""
