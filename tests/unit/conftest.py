"""
Unit Test Fixtures.

Fixtures for unit tests - all remote collaborators are mocked.
Unit tests should be fast and isolated, never touching a real store.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from session_notes.backend.clients.validator import ValidatorClient
from session_notes.backend.repositories.note import SessionNoteRepository
from session_notes.backend.schemas.note import ValidationResponse
from session_notes.backend.services.note_store import NoteStore


# =============================================================================
# Adapter Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_repo() -> MagicMock:
    """
    Mock session note repository.

    Usage:
        def test_load(mock_repo, store):
            mock_repo.list_all.return_value = [note]
    """
    repo = MagicMock(spec=SessionNoteRepository)
    repo.list_all = AsyncMock(return_value=[])
    repo.insert = AsyncMock()
    repo.delete = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def mock_validator() -> MagicMock:
    """Mock validation client that approves everything by default."""
    validator = MagicMock(spec=ValidatorClient)
    validator.validate = AsyncMock(return_value=ValidationResponse(valid=True))
    return validator


@pytest.fixture
def store(mock_repo: MagicMock) -> NoteStore:
    """NoteStore over the mocked repository."""
    return NoteStore(mock_repo)
