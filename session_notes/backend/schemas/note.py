"""
Session Note Schemas.

Pydantic models for session notes as they travel to and from the
persistence store and the validation service. Wire names follow the
store's columns (client_name, session_date, notes, duration, created_at).
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

NOTES_MAX_LENGTH = 500
DURATION_MIN_MINUTES = 1
DURATION_MAX_MINUTES = 300


class SessionNoteDraft(BaseModel):
    """
    A not-yet-persisted session note.

    Only types are enforced here. Content rules (non-empty name, notes
    length, duration bounds) are checked by the creation pipeline so that
    an invalid draft can still be built and rejected field by field.
    """

    client_name: str = Field(default="", description="Client full name")
    session_date: date | None = Field(default=None, description="Date of the session")
    notes: str = Field(default="", description="Free-text session notes")
    duration_minutes: int = Field(
        default=0,
        alias="duration",
        description="Session length in minutes",
    )

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict:
        """Serialize with store column names."""
        return self.model_dump(mode="json", by_alias=True)


class SessionNote(BaseModel):
    """A session note accepted by the persistence store."""

    id: str = Field(description="Store-assigned identifier")
    client_name: str
    session_date: date
    notes: str
    duration_minutes: int = Field(alias="duration")
    created_at: datetime = Field(description="Store-assigned creation timestamp")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ValidationResponse(BaseModel):
    """Answer from the validation service."""

    valid: bool
    error: str | None = None
