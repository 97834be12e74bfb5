"""
Deletion Flow.

Two-step delete: request_delete() selects a target and opens the
confirmation state, confirm_delete() commits it through the note store.
Only one confirmation can be in flight per cycle.
"""

from session_notes.backend.core.result import Result
from session_notes.backend.schemas.note import SessionNote
from session_notes.backend.services.base import BaseService
from session_notes.backend.services.note_store import NoteStore


class DeletionFlow(BaseService):
    """Confirmation state machine in front of NoteStore.remove."""

    def __init__(self, store: NoteStore) -> None:
        super().__init__()
        self.store = store
        self._target: SessionNote | None = None
        self._deleting = False

    @property
    def pending_target(self) -> SessionNote | None:
        """Note awaiting confirmation, if any."""
        return self._target

    @property
    def is_confirming(self) -> bool:
        return self._target is not None

    @property
    def is_deleting(self) -> bool:
        return self._deleting

    def request_delete(self, note_id: str) -> bool:
        """
        Select a note for deletion. Never touches the network.

        Returns:
            True if the note was selected; False if it is not in the store's
            current list or a deletion is already in flight
        """
        if self._deleting:
            return False
        note = self.store.get(note_id)
        if note is None:
            return False
        self._target = note
        self._log_debug("Deletion requested", note_id=note_id)
        return True

    def cancel(self) -> None:
        """Drop the selection. Ignored while a deletion is in flight."""
        if self._deleting:
            return
        self._target = None

    async def confirm_delete(self) -> Result[None] | None:
        """
        Delete the selected note.

        Returns:
            None when there is nothing to do (no selection, or a confirmation
            already in flight); otherwise the store's remove Result. The
            selection is cleared either way once the call settles.
        """
        if self._target is None or self._deleting:
            return None

        target = self._target
        self._deleting = True
        try:
            return await self.store.remove(target.id)
        finally:
            self._deleting = False
            self._target = None
