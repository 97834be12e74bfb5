"""
Schemas Module.

Pydantic models for session notes and validation responses.
"""

from session_notes.backend.schemas.note import (
    SessionNote,
    SessionNoteDraft,
    ValidationResponse,
)

__all__ = [
    "SessionNote",
    "SessionNoteDraft",
    "ValidationResponse",
]
