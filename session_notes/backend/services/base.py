"""
Base Service.

Base class for the client-side services. Services orchestrate adapters
(repository, validator), apply state changes and convert adapter
exceptions into Result values.

Usage:
    from session_notes.backend.services.base import BaseService

    class NoteStore(BaseService):
        def __init__(self, repo: SessionNoteRepository) -> None:
            super().__init__()
            self.repo = repo

        async def remove(self, note_id: str) -> Result[None]:
            result = await self._execute_remote_operation("delete_note", self.repo.delete(note_id))
            ...
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from session_notes.backend.core.exceptions import ApplicationError
from session_notes.backend.core.logging import get_logger
from session_notes.backend.core.result import Result

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Logging context
    - Conversion of ApplicationError into failed Results
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    async def _execute_remote_operation(
        self,
        operation: str,
        coro: Awaitable[T],
    ) -> Result[T]:
        """
        Await a remote call and wrap its outcome.

        Only ApplicationError is converted; anything else is a bug and
        propagates.

        Args:
            operation: Description of the operation for logging
            coro: Awaitable to execute

        Returns:
            Result carrying the value or the raised ApplicationError
        """
        try:
            return Result.success(await coro)
        except ApplicationError as e:
            self._logger.warning(
                "Remote operation failed",
                extra={
                    "service": self.__class__.__name__,
                    "operation": operation,
                    "code": e.code,
                    "error": e.message,
                },
            )
            return Result.failure(e)

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
