"""
HTTP Client for Remote Services.

Async HTTP client shared by the persistence repository and the validation
service client. Every request carries the store API key both as the
`apikey` header and as a bearer token, which is what the hosted REST and
edge-function gateways expect.
"""

from typing import Any

import httpx

from session_notes.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)


class RestClient:
    """
    HTTP client for the remote store and validation service.

    Features:
    - Lazily created httpx.AsyncClient, reused across calls
    - Auth headers from the configured API key
    - Structured logging of requests/responses

    Usage:
        client = RestClient(api_key=settings.store_api_key, timeout=10.0)
        response = await client.get("http://host/rest/v1/session_notes")
    """

    def __init__(
        self,
        api_key: str = "",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the REST client.

        Args:
            api_key: Key sent as `apikey` and bearer token. Empty disables auth headers.
            timeout: Default request timeout in seconds.
            transport: Optional httpx transport (tests inject httpx.MockTransport).
        """
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(
        self,
        method: str,
        url: str,
        source: str = "internal",
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request.

        Args:
            method: HTTP method (GET, POST, DELETE, ...)
            url: Absolute URL
            source: Log source for the request records
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response (any status; callers decide what is an error)

        Raises:
            httpx.HTTPError: On transport failure or timeout
        """
        client = await self._get_client()

        log_with_source(logger, source, "debug", "Remote request", method=method, url=url)

        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                source,
                "error",
                "Remote request failed",
                method=method,
                url=url,
                error=str(e),
            )
            raise

        log_with_source(
            logger,
            source,
            "debug",
            "Remote response",
            method=method,
            url=url,
            status_code=response.status_code,
        )
        return response

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", url, **kwargs)

    async def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        """Make a DELETE request."""
        return await self.request("DELETE", url, **kwargs)
