"""
Creation Pipeline.

Gates every new session note through three ordered steps:

    1. local structural checks (no network)
    2. remote validation (single attempt)
    3. NoteStore.create (at most once)

Each step only runs when the previous one passed. Errors come back as a
failed Result; nothing is raised past submit().
"""

from session_notes.backend.clients.validator import ValidatorClient
from session_notes.backend.core.exceptions import (
    ApplicationError,
    RemoteValidationRejected,
    StructuralValidationError,
    ValidationServiceUnavailable,
)
from session_notes.backend.core.result import Result
from session_notes.backend.schemas.note import (
    DURATION_MAX_MINUTES,
    DURATION_MIN_MINUTES,
    NOTES_MAX_LENGTH,
    SessionNote,
    SessionNoteDraft,
)
from session_notes.backend.services.base import BaseService
from session_notes.backend.services.note_store import NoteStore


def check_draft(draft: SessionNoteDraft) -> dict[str, str]:
    """
    Run the local checks on a draft.

    Returns:
        Mapping of failing field name to message; empty when the draft passes
    """
    errors: dict[str, str] = {}

    if not draft.client_name.strip():
        errors["client_name"] = "Client name is required"

    if draft.session_date is None:
        errors["session_date"] = "Session date is required"

    if not draft.notes.strip():
        errors["notes"] = "Notes are required"
    elif len(draft.notes) > NOTES_MAX_LENGTH:
        errors["notes"] = f"Notes must not exceed {NOTES_MAX_LENGTH} characters"

    if draft.duration_minutes < DURATION_MIN_MINUTES:
        errors["duration_minutes"] = "Duration must be greater than 0"
    elif draft.duration_minutes > DURATION_MAX_MINUTES:
        errors["duration_minutes"] = f"Duration must not exceed {DURATION_MAX_MINUTES} minutes"

    return errors


class CreationPipeline(BaseService):
    """
    Validate-then-persist workflow for new session notes.

    is_submitting stays true while a submit is outstanding so a caller can
    disable its submit control.
    """

    def __init__(self, store: NoteStore, validator: ValidatorClient) -> None:
        super().__init__()
        self.store = store
        self.validator = validator
        self._submitting = 0

    @property
    def is_submitting(self) -> bool:
        return self._submitting > 0

    async def submit(self, draft: SessionNoteDraft) -> Result[SessionNote]:
        """
        Validate a draft locally and remotely, then persist it.

        Returns:
            The store's create Result on the persistence step, or a failed
            Result with StructuralValidationError, RemoteValidationRejected
            or ValidationServiceUnavailable from the earlier steps
        """
        field_errors = check_draft(draft)
        if field_errors:
            self._log_debug("Draft failed local checks", fields=list(field_errors))
            return Result.failure(
                StructuralValidationError("Please correct the highlighted fields", field_errors)
            )

        self._submitting += 1
        try:
            return await self._validate_and_persist(draft)
        finally:
            self._submitting -= 1

    async def _validate_and_persist(self, draft: SessionNoteDraft) -> Result[SessionNote]:
        try:
            answer = await self.validator.validate(draft)
        except ApplicationError as e:
            self._log_operation("Validation unavailable", code=e.code)
            return Result.failure(e)
        except Exception as e:
            self._log_operation("Validation unavailable", error=str(e), error_type=type(e).__name__)
            return Result.failure(ValidationServiceUnavailable(cause="unexpected"))

        if not answer.valid:
            message = answer.error or "Validation failed"
            self._log_operation("Draft rejected by validator", error=message)
            return Result.failure(RemoteValidationRejected(message))

        return await self.store.create(draft)
