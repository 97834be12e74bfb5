"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Adapters raise these; the note store and creation pipeline convert them
into Result values at their boundary.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class StructuralValidationError(ApplicationError):
    """Raised when a draft fails local checks. No network call was made."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: dict[str, str] | None = None,
    ) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_STRUCTURAL")

    @property
    def fields(self) -> list[str]:
        """Names of the fields that failed."""
        return list(self.details)


class RemoteValidationRejected(ApplicationError):
    """Raised when the validation service explicitly rejects a draft."""

    def __init__(self, message: str = "Validation failed") -> None:
        super().__init__(message, code="VAL_REMOTE_REJECTED")


class ValidationServiceUnavailable(ApplicationError):
    """Raised when the validation service cannot be reached or answers garbage."""

    def __init__(
        self,
        message: str = "Validation service unavailable. Please try again later.",
        cause: str | None = None,
    ) -> None:
        self.cause = cause
        super().__init__(message, code="SYS_VALIDATION_UNAVAILABLE")


class PersistenceError(ApplicationError):
    """Raised when a list, insert or delete call to the store fails."""

    def __init__(self, message: str = "Persistence error", operation: str | None = None) -> None:
        self.operation = operation
        super().__init__(message, code="SYS_PERSISTENCE_ERROR")


class StoreClosedError(ApplicationError):
    """Raised when an operation is started on a closed note store."""

    def __init__(self, message: str = "Note store is closed") -> None:
        super().__init__(message, code="SYS_STORE_CLOSED")
