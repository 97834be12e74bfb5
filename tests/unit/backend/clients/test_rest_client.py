"""Unit tests for the remote services HTTP client."""

import httpx
import pytest

from session_notes.backend.clients.rest import RestClient


class TestRestClient:
    """Tests for RestClient class."""

    @pytest.mark.asyncio
    async def test_client_defaults(self) -> None:
        client = RestClient()
        assert client.api_key == ""
        assert client.timeout == 30.0

    @pytest.mark.asyncio
    async def test_auth_headers_sent(self) -> None:
        """API key should be sent as apikey and bearer token."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["headers"] = request.headers
            return httpx.Response(200)

        client = RestClient(api_key="secret", transport=httpx.MockTransport(handler))
        await client.get("http://store.test/rest/v1/session_notes")
        await client.close()

        assert seen["headers"]["apikey"] == "secret"
        assert seen["headers"]["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_no_auth_headers_without_key(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["headers"] = request.headers
            return httpx.Response(200)

        client = RestClient(transport=httpx.MockTransport(handler))
        await client.get("http://store.test/")
        await client.close()

        assert "apikey" not in seen["headers"]
        assert "Authorization" not in seen["headers"]

    @pytest.mark.asyncio
    async def test_error_status_is_returned_not_raised(self) -> None:
        """Status handling belongs to the callers."""
        client = RestClient(transport=httpx.MockTransport(lambda r: httpx.Response(500)))

        response = await client.post("http://store.test/", json={})
        await client.close()

        assert response.status_code == 500

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        client = RestClient(transport=httpx.MockTransport(handler))
        with pytest.raises(httpx.ConnectError):
            await client.delete("http://store.test/")
        await client.close()

    @pytest.mark.asyncio
    async def test_close_client(self) -> None:
        client = RestClient()
        await client._get_client()
        assert client._client is not None

        await client.close()
        assert client._client is None
