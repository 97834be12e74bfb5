"""
Root Pytest Fixtures.

Shared fixtures available to all test types: note factories and the
reference draft used across store, pipeline and CLI tests.
"""

from collections.abc import Callable
from datetime import date, datetime, timezone

import pytest

from session_notes.backend.schemas.note import SessionNote, SessionNoteDraft


# =============================================================================
# Note Fixtures
# =============================================================================


@pytest.fixture
def draft() -> SessionNoteDraft:
    """A draft that passes every local check."""
    return SessionNoteDraft(
        client_name="Jane Doe",
        session_date=date(2024, 1, 15),
        notes="Discussed coping strategies.",
        duration_minutes=50,
    )


@pytest.fixture
def make_note() -> Callable[..., SessionNote]:
    """
    Factory for stored notes.

    Usage:
        def test_sorting(make_note):
            note = make_note("n1", "2024-02-01")
    """

    def _make(
        note_id: str,
        session_date: str = "2024-01-15",
        client_name: str = "Jane Doe",
        notes: str = "Discussed coping strategies.",
        duration: int = 50,
    ) -> SessionNote:
        return SessionNote(
            id=note_id,
            client_name=client_name,
            session_date=date.fromisoformat(session_date),
            notes=notes,
            duration_minutes=duration,
            created_at=datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc),
        )

    return _make

