"""
Unit Tests for Session Note Repository.

Drives the repository through httpx.MockTransport so the exact requests
sent to the store can be asserted.
"""

import json

import httpx
import pytest

from session_notes.backend.clients.rest import RestClient
from session_notes.backend.core.exceptions import PersistenceError
from session_notes.backend.repositories.note import SessionNoteRepository

BASE_URL = "http://store.test/rest/v1"

ROW = {
    "id": "n1",
    "client_name": "Jane Doe",
    "session_date": "2024-01-15",
    "notes": "Discussed coping strategies.",
    "duration": 50,
    "created_at": "2024-01-15T10:00:00Z",
}


def _repo(handler) -> SessionNoteRepository:
    client = RestClient(api_key="anon-key", transport=httpx.MockTransport(handler))
    return SessionNoteRepository(client, BASE_URL)


class TestListAll:
    @pytest.mark.asyncio
    async def test_requests_sorted_rows(self):
        """Should ask the store for every column, newest session first."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json=[ROW])

        notes = await _repo(handler).list_all()

        request = seen["request"]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/session_notes"
        assert request.url.params["order"] == "session_date.desc"
        assert request.url.params["select"] == "*"
        assert request.headers["apikey"] == "anon-key"
        assert request.headers["Authorization"] == "Bearer anon-key"
        assert [n.id for n in notes] == ["n1"]
        assert notes[0].duration_minutes == 50

    @pytest.mark.asyncio
    async def test_error_status_raises_with_store_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"message": "Invalid API key"})

        with pytest.raises(PersistenceError) as exc_info:
            await _repo(handler).list_all()

        assert exc_info.value.message == "Invalid API key"
        assert exc_info.value.operation == "fetch_notes"

    @pytest.mark.asyncio
    async def test_transport_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(PersistenceError, match="store unreachable"):
            await _repo(handler).list_all()

    @pytest.mark.asyncio
    async def test_malformed_rows_raise(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"not": "a list"})

        with pytest.raises(PersistenceError, match="malformed"):
            await _repo(handler).list_all()


class TestInsert:
    @pytest.mark.asyncio
    async def test_posts_draft_and_returns_stored_row(self, draft):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(201, json=[ROW])

        note = await _repo(handler).insert(draft)

        request = seen["request"]
        assert request.method == "POST"
        assert request.headers["Prefer"] == "return=representation"
        assert json.loads(request.content) == [{
            "client_name": "Jane Doe",
            "session_date": "2024-01-15",
            "notes": "Discussed coping strategies.",
            "duration": 50,
        }]
        assert note.id == "n1"
        assert note.created_at.year == 2024

    @pytest.mark.asyncio
    async def test_empty_representation_raises(self, draft):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json=[])

        with pytest.raises(PersistenceError, match="returned 0 rows"):
            await _repo(handler).insert(draft)

    @pytest.mark.asyncio
    async def test_error_without_body_uses_fallback(self, draft):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="upstream down")

        with pytest.raises(PersistenceError) as exc_info:
            await _repo(handler).insert(draft)

        assert exc_info.value.message == "Failed to add note (HTTP 500)"


class TestDelete:
    @pytest.mark.asyncio
    async def test_deletes_by_id_filter(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(204)

        await _repo(handler).delete("n1")

        assert seen["request"].method == "DELETE"
        assert seen["request"].url.params["id"] == "eq.n1"

    @pytest.mark.asyncio
    async def test_delete_error_raises(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json={"message": "permission denied"})

        with pytest.raises(PersistenceError, match="permission denied"):
            await _repo(handler).delete("n1")
