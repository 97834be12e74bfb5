"""
Result Envelope.

Typed success/failure value returned by the note store and the creation
pipeline. Failures carry an ApplicationError so the caller can branch on
the concrete error type or its code.

Usage:
    result = await store.create(draft)
    if result.ok:
        note = result.value
    else:
        show(result.error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from session_notes.backend.core.exceptions import ApplicationError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a store or pipeline operation."""

    value: T | None = None
    error: ApplicationError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ApplicationError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T | None:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        return self.value
