"""
Validation Service Client.

Calls the remote validate-session-note function. A reachable service
answers {"valid": bool, "error": str | None}; anything else (transport
failure, timeout, non-2xx status, malformed body, open circuit) is
reported as ValidationServiceUnavailable. Rejections are returned, not
raised, so the pipeline can tell them apart from outages.
"""

import aiobreaker
import httpx
from pydantic import ValidationError

from session_notes.backend.clients.rest import RestClient
from session_notes.backend.core.exceptions import ValidationServiceUnavailable
from session_notes.backend.core.logging import get_logger, log_with_source
from session_notes.backend.core.resilience import create_circuit_breaker
from session_notes.backend.schemas.note import SessionNoteDraft, ValidationResponse

logger = get_logger(__name__)


class ValidatorClient:
    """
    Client for the remote validation service.

    Single attempt per call. The circuit breaker only counts transport and
    status failures; an explicit rejection is a healthy answer.
    """

    def __init__(
        self,
        client: RestClient,
        base_url: str,
        function: str = "validate-session-note",
        timeout: float | None = None,
        breaker: aiobreaker.CircuitBreaker | None = None,
    ) -> None:
        self.client = client
        self.url = f"{base_url.rstrip('/')}/{function}"
        self.timeout = timeout
        self.breaker = breaker or create_circuit_breaker("validator")

    async def _post(self, payload: dict) -> httpx.Response:
        kwargs = {"json": payload, "source": "validator"}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        response = await self.client.post(self.url, **kwargs)
        response.raise_for_status()
        return response

    async def validate(self, draft: SessionNoteDraft) -> ValidationResponse:
        """
        Ask the validation service whether a draft is acceptable.

        Returns:
            ValidationResponse from the service (valid or rejected)

        Raises:
            ValidationServiceUnavailable: If no usable answer was obtained
        """
        try:
            response = await self.breaker.call_async(self._post, draft.to_payload())
        except aiobreaker.CircuitBreakerError as e:
            log_with_source(
                logger, "validator", "warning", "Validation circuit open", error=str(e),
            )
            raise ValidationServiceUnavailable(cause="circuit_open") from e
        except httpx.HTTPStatusError as e:
            log_with_source(
                logger,
                "validator",
                "warning",
                "Validation service returned an error status",
                status_code=e.response.status_code,
            )
            raise ValidationServiceUnavailable(cause=f"status_{e.response.status_code}") from e
        except httpx.HTTPError as e:
            log_with_source(
                logger, "validator", "warning", "Validation service unreachable", error=str(e),
            )
            raise ValidationServiceUnavailable(cause="transport") from e

        try:
            answer = ValidationResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            log_with_source(
                logger, "validator", "warning", "Invalid response from validation service",
            )
            raise ValidationServiceUnavailable(cause="malformed_response") from e

        log_with_source(logger, "validator", "debug", "Validation answered", valid=answer.valid)
        return answer
