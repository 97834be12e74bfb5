"""
Note Store.

Owns the in-memory copy of the session notes and mediates every read and
write against the persistence store. The list is only changed after the
store has confirmed a call, and always by replacing the snapshot in one
assignment, so readers never see a half-applied insert or removal.

Invariants:
    - notes are ordered by session_date, newest first
    - every note in the list was returned by the store
    - a failed call leaves the list untouched and sets last_error
"""

from datetime import date
from types import TracebackType

from session_notes.backend.core.exceptions import StoreClosedError
from session_notes.backend.core.result import Result
from session_notes.backend.repositories.note import SessionNoteRepository
from session_notes.backend.schemas.note import SessionNote, SessionNoteDraft
from session_notes.backend.services.base import BaseService


def _sort_key(note: SessionNote) -> date:
    return note.session_date


def sort_notes(notes: list[SessionNote] | tuple[SessionNote, ...]) -> tuple[SessionNote, ...]:
    """Order notes by session date, newest first. Ties keep their relative order."""
    return tuple(sorted(notes, key=_sort_key, reverse=True))


class NoteStore(BaseService):
    """
    Client-side synchronization core for session notes.

    Create one per application run and pass it to its consumers; close it
    on exit. Operations may overlap on the event loop. Results that arrive
    after close() are returned to their caller but no longer touch the list.
    """

    def __init__(self, repo: SessionNoteRepository) -> None:
        super().__init__()
        self.repo = repo
        self._notes: tuple[SessionNote, ...] = ()
        self._last_error: str | None = None
        self._in_flight = 0
        self._loads_in_flight = 0
        self._closed = False
        # Loads are numbered as they start; a load older than the last
        # applied one is discarded.
        self._load_seq = 0
        self._applied_load_seq = 0
        # Mutations confirmed while a load is in flight, tagged with the
        # newest load number at confirmation time.
        self._journal: list[tuple[int, str, SessionNote | str]] = []

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    @property
    def notes(self) -> tuple[SessionNote, ...]:
        """Current snapshot of the notes, newest session first."""
        return self._notes

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def is_loading(self) -> bool:
        return self._loads_in_flight > 0

    @property
    def in_flight(self) -> int:
        """Number of store calls that have been sent and not yet settled."""
        return self._in_flight

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, note_id: str) -> SessionNote | None:
        """Find a note in the current snapshot."""
        for note in self._notes:
            if note.id == note_id:
                return note
        return None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def load(self) -> Result[list[SessionNote]]:
        """
        Fetch every note from the store and replace the in-memory list.

        Returns:
            Result with the list as it stands after the load, or the
            PersistenceError on failure (list left unchanged)
        """
        if self._closed:
            return Result.failure(StoreClosedError())

        self._load_seq += 1
        seq = self._load_seq
        self._last_error = None
        self._loads_in_flight += 1
        self._in_flight += 1
        self._log_debug("Loading notes", load_seq=seq)

        try:
            result = await self._execute_remote_operation("fetch_notes", self.repo.list_all())
        finally:
            self._loads_in_flight -= 1
            self._in_flight -= 1

        if self._closed:
            return result

        if not result.ok:
            if seq >= self._applied_load_seq:
                self._last_error = result.error.message
            self._trim_journal()
            return result

        if seq < self._applied_load_seq:
            self._log_debug("Discarding stale load", load_seq=seq)
            self._trim_journal()
            return Result.success(list(self._notes))

        fetched = self._replay(seq, result.value)
        self._notes = sort_notes(fetched)
        self._applied_load_seq = seq
        self._trim_journal()
        self._log_operation("Notes loaded", count=len(self._notes))
        return Result.success(list(self._notes))

    async def create(self, draft: SessionNoteDraft) -> Result[SessionNote]:
        """
        Insert a note and add the stored record to the list.

        The draft is expected to have passed validation already; the
        creation pipeline is the normal way in.

        Returns:
            Result with the stored note (carrying id and created_at), or
            the PersistenceError on failure (list left unchanged)
        """
        if self._closed:
            return Result.failure(StoreClosedError())

        self._last_error = None
        self._in_flight += 1
        self._log_operation("Creating note", client_name=draft.client_name)

        try:
            result = await self._execute_remote_operation("add_note", self.repo.insert(draft))
        finally:
            self._in_flight -= 1

        if self._closed:
            return result

        if not result.ok:
            self._last_error = result.error.message
            return result

        note = result.value
        self._notes = sort_notes(
            [note] + [n for n in self._notes if n.id != note.id]
        )
        self._record("create", note)
        self._log_debug("Note created", note_id=note.id)
        return result

    async def remove(self, note_id: str) -> Result[None]:
        """
        Delete a note by id and drop it from the list.

        Removing an id that is not in the list (or no longer in the store)
        succeeds without changing anything.

        Returns:
            Empty success Result, or the PersistenceError on failure
            (list left unchanged)
        """
        if self._closed:
            return Result.failure(StoreClosedError())

        self._last_error = None
        self._in_flight += 1
        self._log_operation("Deleting note", note_id=note_id)

        try:
            result = await self._execute_remote_operation("delete_note", self.repo.delete(note_id))
        finally:
            self._in_flight -= 1

        if self._closed:
            return result

        if not result.ok:
            self._last_error = result.error.message
            return result

        self._notes = tuple(n for n in self._notes if n.id != note_id)
        self._record("remove", note_id)
        return Result.success()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Detach the store. Later completions no longer mutate state."""
        if self._closed:
            return
        self._closed = True
        self._journal.clear()
        self._log_debug("Note store closed", in_flight=self._in_flight)

    async def __aenter__(self) -> "NoteStore":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Overlapping load reconciliation
    # -------------------------------------------------------------------------

    def _record(self, op: str, payload: SessionNote | str) -> None:
        if self._loads_in_flight:
            self._journal.append((self._load_seq, op, payload))

    def _replay(self, seq: int, fetched: list[SessionNote]) -> list[SessionNote]:
        """Apply mutations confirmed after load `seq` started onto its result."""
        notes = list(fetched)
        for entry_seq, op, payload in self._journal:
            if entry_seq < seq:
                continue
            if op == "create":
                if all(n.id != payload.id for n in notes):
                    notes.insert(0, payload)
            else:
                notes = [n for n in notes if n.id != payload]
        return notes

    def _trim_journal(self) -> None:
        if not self._loads_in_flight:
            self._journal.clear()
