"""Tests for the settingsform.logging module."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import structlog

from settingsform.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    request_context,
)


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_configure_logging_default(self) -> None:
        """Test default logging configuration (console output)."""
        configure_logging()

        log = structlog.get_logger()
        assert log is not None

    def test_configure_logging_json_via_env(self) -> None:
        """Test JSON logging when SETTINGSFORM_LOG_FORMAT=json."""
        with patch.dict(os.environ, {"SETTINGSFORM_LOG_FORMAT": "json"}):
            configure_logging()

            log = structlog.get_logger()
            assert log is not None

    def test_configure_logging_custom_level(self) -> None:
        """Test setting custom log level."""
        configure_logging(level=logging.DEBUG)

        assert logging.getLogger().level == logging.DEBUG

    def test_configure_logging_level_from_env(self) -> None:
        """Test log level from SETTINGSFORM_LOG_LEVEL env var."""
        with patch.dict(os.environ, {"SETTINGSFORM_LOG_LEVEL": "INFO"}):
            configure_logging()

            assert logging.getLogger().level == logging.INFO

    def test_unknown_level_name_falls_back_to_warning(self) -> None:
        """Test an unknown level name is read as WARNING."""
        with patch.dict(os.environ, {"SETTINGSFORM_LOG_LEVEL": "chatty"}):
            configure_logging()

            assert logging.getLogger().level == logging.WARNING

    def test_reconfigure_replaces_handlers(self) -> None:
        """Test repeated configuration keeps a single root handler."""
        configure_logging()
        configure_logging()

        assert len(logging.getLogger().handlers) == 1


class TestGetLogger:
    """Tests for get_logger function."""

    def test_logger_can_log_with_structured_data(self) -> None:
        """Test logging with structured data."""
        configure_logging()

        log = get_logger("test")
        log.info("event_name", group_id="my_plugin", keys=3)
        log.warning("warning_event", reason="invalid_token")


class TestContextBinding:
    """Tests for context binding functions."""

    def test_bind_context(self) -> None:
        """Test binding context variables."""
        clear_context()

        bind_context(group_id="my_plugin")

        ctx = structlog.contextvars.get_contextvars()
        assert ctx["group_id"] == "my_plugin"

    def test_clear_context(self) -> None:
        """Test clearing context variables."""
        bind_context(group_id="my_plugin")
        clear_context()

        assert structlog.contextvars.get_contextvars() == {}

    def test_request_context_binds_and_resets(self) -> None:
        """Test request_context binds group and request ids for the block only."""
        clear_context()

        with request_context(group_id="my_plugin", action="export") as request_id:
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["group_id"] == "my_plugin"
            assert ctx["action"] == "export"
            assert ctx["request_id"] == request_id
            assert len(request_id) == 12

        assert "group_id" not in structlog.contextvars.get_contextvars()

    def test_request_context_restores_outer_binding(self) -> None:
        """Test a nested request restores the outer group id."""
        clear_context()
        bind_context(group_id="outer")

        with request_context(group_id="inner"):
            assert structlog.contextvars.get_contextvars()["group_id"] == "inner"

        assert structlog.contextvars.get_contextvars()["group_id"] == "outer"
