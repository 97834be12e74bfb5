"""
Application Entry Point.

Builds the note store and its collaborators once per run and tears them
down on exit. Consumers receive the NoteApp bundle; there is no global
store instance.

Usage:
    async with note_app() as app:
        await app.store.load()
        result = await app.pipeline.submit(draft)
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from session_notes.backend.clients.rest import RestClient
from session_notes.backend.clients.validator import ValidatorClient
from session_notes.backend.core.config import get_app_config, get_settings
from session_notes.backend.core.logging import get_logger, setup_logging
from session_notes.backend.core.resilience import create_circuit_breaker
from session_notes.backend.repositories.note import SessionNoteRepository
from session_notes.backend.services.deletion import DeletionFlow
from session_notes.backend.services.note_store import NoteStore
from session_notes.backend.services.pipeline import CreationPipeline

logger = get_logger(__name__)


@dataclass(frozen=True)
class NoteApp:
    """Everything a presentation layer needs, wired together."""

    store: NoteStore
    pipeline: CreationPipeline
    deletion: DeletionFlow


def build_note_app(
    client: RestClient,
    persistence_url: str,
    validator_url: str,
    table: str = "session_notes",
    function: str = "validate-session-note",
    validator_timeout: float | None = None,
    breaker_fail_max: int = 5,
    breaker_timeout: int = 30,
) -> NoteApp:
    """Wire the store, pipeline and deletion flow around one HTTP client."""
    repo = SessionNoteRepository(client, persistence_url, table)
    validator = ValidatorClient(
        client,
        validator_url,
        function=function,
        timeout=validator_timeout,
        breaker=create_circuit_breaker(
            "validator",
            fail_max=breaker_fail_max,
            timeout_duration=breaker_timeout,
        ),
    )
    store = NoteStore(repo)
    return NoteApp(
        store=store,
        pipeline=CreationPipeline(store, validator),
        deletion=DeletionFlow(store),
    )


@asynccontextmanager
async def note_app(
    transport: httpx.AsyncBaseTransport | None = None,
    configure_logging: bool = True,
) -> AsyncGenerator[NoteApp, None]:
    """
    Application lifespan: build from config, close on exit.

    Args:
        transport: Optional httpx transport for the shared client
        configure_logging: Whether to run setup_logging() from logging.yaml
    """
    app_config = get_app_config()
    if configure_logging:
        setup_logging(level=app_config.logging.level)

    services = app_config.services
    client = RestClient(
        api_key=get_settings().store_api_key,
        timeout=services.persistence.timeout_seconds,
        transport=transport,
    )
    app = build_note_app(
        client,
        persistence_url=services.persistence.base_url,
        validator_url=services.validator.base_url,
        table=services.persistence.table,
        function=services.validator.function,
        validator_timeout=services.validator.timeout_seconds,
        breaker_fail_max=services.validator.circuit_breaker.fail_max,
        breaker_timeout=services.validator.circuit_breaker.timeout_duration,
    )

    logger.info(
        "Application starting",
        extra={
            "app_name": app_config.application.name,
            "env": app_config.application.environment,
        },
    )
    try:
        yield app
    finally:
        app.store.close()
        await client.close()
        logger.info("Application shutting down")
