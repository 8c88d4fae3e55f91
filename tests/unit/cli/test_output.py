"""Unit tests for CLI output formatting utilities."""

from __future__ import annotations

import json
from enum import Enum

import pytest

from settingsform.cli.context import CLIContext, ExitCode
from settingsform.cli.helpers import create_backend
from settingsform.cli.output import (
    OutputFormat,
    format_error,
    format_json,
    format_success,
    format_warning,
)
from settingsform.config import SettingsFormConfig, StorageConfig
from settingsform.store import JsonFileOptionBackend, MemoryOptionBackend


class TestOutputFormat:
    """Tests for OutputFormat enum."""

    def test_enum_values(self) -> None:
        """Test all OutputFormat enum values are defined correctly."""
        assert OutputFormat.TABLE.value == "table"
        assert OutputFormat.JSON.value == "json"

    def test_is_string_enum(self) -> None:
        """Test OutputFormat is a string enum (str, Enum)."""
        assert issubclass(OutputFormat, str)
        assert issubclass(OutputFormat, Enum)


class TestFormatters:
    """Tests for the message formatters."""

    def test_format_error_with_details_and_suggestion(self) -> None:
        """Test details are indented and the suggestion follows."""
        message = format_error(
            "Invalid schema",
            details=["at sections.0"],
            suggestion="Add a section_id",
        )

        assert message == (
            "Error: Invalid schema\n  at sections.0\nSuggestion: Add a section_id"
        )

    def test_format_error_plain(self) -> None:
        """Test a bare error message."""
        assert format_error("Boom") == "Error: Boom"

    def test_format_success(self) -> None:
        """Test success prefix."""
        assert format_success("Done") == "Success: Done"

    def test_format_warning(self) -> None:
        """Test warning prefix."""
        assert format_warning("Careful") == "Warning: Careful"

    def test_format_json_sorted(self) -> None:
        """Test JSON output is indented with sorted keys."""
        output = format_json({"b": 1, "a": "é"})

        assert output.index('"a"') < output.index('"b"')
        assert "é" in output
        assert json.loads(output) == {"a": "é", "b": 1}

    def test_format_json_rejects_unserializable(self) -> None:
        """Test non-JSON data raises TypeError."""
        with pytest.raises(TypeError):
            format_json({"a": object()})


class TestContext:
    """Tests for CLIContext, exit codes and backend selection."""

    def test_exit_codes(self) -> None:
        """Test exit code values."""
        assert (ExitCode.SUCCESS, ExitCode.FAILURE, ExitCode.USAGE) == (0, 1, 2)

    def test_context_defaults(self) -> None:
        """Test CLIContext defaults."""
        ctx = CLIContext(config=SettingsFormConfig())

        assert ctx.config_path is None
        assert ctx.verbosity == 0
        assert ctx.quiet is False

    def test_memory_backend(self) -> None:
        """Test storage.backend=memory selects the memory backend."""
        config = SettingsFormConfig(storage=StorageConfig(backend="memory"))

        assert isinstance(create_backend(config), MemoryOptionBackend)

    def test_file_backend(self) -> None:
        """Test storage.backend=file uses the configured directory."""
        config = SettingsFormConfig(storage=StorageConfig(directory="data"))

        backend = create_backend(config)

        assert isinstance(backend, JsonFileOptionBackend)
        assert str(backend.directory) == "data"
