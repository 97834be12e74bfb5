"""
Base Repository.

Base class for repositories backed by a PostgREST-style table endpoint.
Converts transport and status failures into PersistenceError.
"""

from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from session_notes.backend.clients.rest import RestClient
from session_notes.backend.core.exceptions import PersistenceError
from session_notes.backend.core.logging import get_logger

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)


def _error_message(response: httpx.Response, fallback: str) -> str:
    """Pull the store's error message out of a failed response."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


class BaseRepository(Generic[ModelType]):
    """
    Base repository over one remote table.

    Subclasses should set the model class:

        class SessionNoteRepository(BaseRepository[SessionNote]):
            model = SessionNote
    """

    model: type[ModelType]

    def __init__(self, client: RestClient, base_url: str, table: str) -> None:
        self.client = client
        self.table_url = f"{base_url.rstrip('/')}/{table}"

    async def _request(self, operation: str, method: str, **kwargs: Any) -> httpx.Response:
        """
        Execute a table request with error handling.

        Raises:
            PersistenceError: On transport failure or non-2xx status
        """
        try:
            response = await self.client.request(
                method, self.table_url, source="persistence", **kwargs
            )
        except httpx.HTTPError as e:
            logger.error(
                "Store request failed",
                extra={"operation": operation, "error": str(e)},
            )
            raise PersistenceError(
                f"Failed to {operation.replace('_', ' ')}: store unreachable",
                operation=operation,
            ) from e

        if response.is_error:
            message = _error_message(
                response, f"Failed to {operation.replace('_', ' ')} (HTTP {response.status_code})"
            )
            logger.warning(
                "Store rejected request",
                extra={
                    "operation": operation,
                    "status_code": response.status_code,
                    "error": message,
                },
            )
            raise PersistenceError(message, operation=operation)

        return response

    def _parse_rows(self, operation: str, response: httpx.Response) -> list[ModelType]:
        """
        Parse a JSON array of rows into models.

        Raises:
            PersistenceError: If the body is not a list of valid rows
        """
        try:
            rows = response.json()
            if not isinstance(rows, list):
                raise ValueError("expected a JSON array")
            return [self.model.model_validate(row) for row in rows]
        except (ValueError, ValidationError) as e:
            logger.error(
                "Store returned malformed rows",
                extra={"operation": operation, "error": str(e)},
            )
            raise PersistenceError(
                f"Failed to {operation.replace('_', ' ')}: malformed store response",
                operation=operation,
            ) from e
