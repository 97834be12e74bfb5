"""
Unit Tests for Centralized Logging.

Tests the logging configuration, structured fields, and source handling.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from session_notes.backend.core import logging as logging_module
from session_notes.backend.core.logging import (
    VALID_SOURCES,
    _resolve_log_path,
    get_logger,
    log_with_source,
    setup_logging,
)


@pytest.fixture
def mock_logging_config():
    """A logging configuration shaped like logging.yaml."""
    return {
        "level": "INFO",
        "format": "json",
        "handlers": {
            "console": {"enabled": True},
            "file": {
                "enabled": True,
                "path": "logs/system.jsonl",
                "max_bytes": 10485760,
                "backup_count": 5,
            },
        },
    }


class TestValidSources:
    def test_contains_core_sources(self):
        assert {"cli", "store", "pipeline", "persistence", "validator"} <= VALID_SOURCES

    def test_is_frozenset(self):
        assert isinstance(VALID_SOURCES, frozenset)


class TestLoggingConfigLoading:
    def test_reads_yaml_once(self, mock_logging_config):
        """Should load from logging.yaml and cache the result."""
        logging_module._logging_config = None

        with patch(
            "session_notes.backend.core.logging.load_yaml_config",
            return_value=mock_logging_config,
        ) as mock_load:
            first = logging_module._load_logging_config()
            second = logging_module._load_logging_config()

        assert first is second
        mock_load.assert_called_once_with("logging.yaml")
        logging_module._logging_config = None

    def test_raises_if_file_missing(self):
        logging_module._logging_config = None

        with patch(
            "session_notes.backend.core.logging.load_yaml_config",
            side_effect=FileNotFoundError("Configuration file not found: logging.yaml"),
        ):
            with pytest.raises(FileNotFoundError, match="logging.yaml"):
                logging_module._load_logging_config()

        logging_module._logging_config = None


class TestSetupLogging:
    def test_override_level(self, mock_logging_config):
        with patch(
            "session_notes.backend.core.logging._load_logging_config",
            return_value=mock_logging_config,
        ):
            setup_logging(level="DEBUG", enable_file_logging=False)

        assert logging.getLogger().level == logging.DEBUG

    def test_uses_config_defaults(self, mock_logging_config):
        with patch(
            "session_notes.backend.core.logging._load_logging_config",
            return_value=mock_logging_config,
        ):
            setup_logging(enable_file_logging=False)

        assert logging.getLogger().level == logging.INFO

    def test_console_disabled_leaves_no_stream_handler(self, mock_logging_config):
        with patch(
            "session_notes.backend.core.logging._load_logging_config",
            return_value=mock_logging_config,
        ):
            setup_logging(enable_console=False, enable_file_logging=False)

        assert logging.getLogger().handlers == []

    def test_file_logging_adds_rotating_handler(self, tmp_path, mock_logging_config):
        log_file = tmp_path / "logs" / "system.jsonl"

        with patch(
            "session_notes.backend.core.logging._load_logging_config",
            return_value=mock_logging_config,
        ), patch(
            "session_notes.backend.core.logging._resolve_log_path",
            return_value=log_file,
        ):
            setup_logging(format_type="json", enable_console=False, enable_file_logging=True)

        handler_types = [type(h).__name__ for h in logging.getLogger().handlers]
        assert handler_types == ["RotatingFileHandler"]
        assert log_file.parent.is_dir()

        for handler in logging.getLogger().handlers[:]:
            handler.close()
            logging.getLogger().removeHandler(handler)


class TestLogWithSource:
    def test_adds_source_field(self):
        logger = get_logger("test")
        mock_info = MagicMock()

        with patch.object(logger, "info", mock_info):
            log_with_source(logger, "store", "info", "Notes loaded", count=3)

        mock_info.assert_called_once_with("Notes loaded", source="store", count=3)

    def test_raises_on_invalid_level(self):
        with pytest.raises(AttributeError):
            log_with_source(get_logger("test"), "cli", "nonexistent_level", "Test")


class TestResolveLogPath:
    def test_relative_to_project_root(self, tmp_path):
        with patch("session_notes.backend.core.logging.find_project_root", return_value=tmp_path):
            assert _resolve_log_path("logs/system.jsonl") == tmp_path / "logs" / "system.jsonl"
