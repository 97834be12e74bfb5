"""
Session Note Repository.

Data access layer for session notes. Talks to the remote store's
session_notes table: list-all, insert-one and delete-by-id.
"""

from session_notes.backend.clients.rest import RestClient
from session_notes.backend.core.exceptions import PersistenceError
from session_notes.backend.repositories.base import BaseRepository
from session_notes.backend.schemas.note import SessionNote, SessionNoteDraft


class SessionNoteRepository(BaseRepository[SessionNote]):
    """
    Repository for SessionNote records.

    Insert is all-or-nothing on the store side. Deleting an id that does
    not exist succeeds, matching the store's filter-based delete.
    """

    model = SessionNote

    def __init__(
        self,
        client: RestClient,
        base_url: str,
        table: str = "session_notes",
    ) -> None:
        super().__init__(client, base_url, table)

    async def list_all(self) -> list[SessionNote]:
        """
        Get every note, newest session first.

        Raises:
            PersistenceError: If the store call fails
        """
        response = await self._request(
            "fetch_notes",
            "GET",
            params={"select": "*", "order": "session_date.desc"},
        )
        return self._parse_rows("fetch_notes", response)

    async def insert(self, draft: SessionNoteDraft) -> SessionNote:
        """
        Insert one note and return the stored record.

        Args:
            draft: Note content without server-assigned fields

        Returns:
            The stored note including id and created_at

        Raises:
            PersistenceError: If the store call fails or returns no row
        """
        response = await self._request(
            "add_note",
            "POST",
            json=[draft.to_payload()],
            headers={"Prefer": "return=representation"},
        )
        rows = self._parse_rows("add_note", response)
        if len(rows) != 1:
            raise PersistenceError(
                f"Failed to add note: store returned {len(rows)} rows",
                operation="add_note",
            )
        return rows[0]

    async def delete(self, note_id: str) -> None:
        """
        Delete a note by id.

        Raises:
            PersistenceError: If the store call fails
        """
        await self._request(
            "delete_note",
            "DELETE",
            params={"id": f"eq.{note_id}"},
        )
