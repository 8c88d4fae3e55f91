"""Output formatting helpers for the settingsform CLI."""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

__all__ = [
    "OutputFormat",
    "format_error",
    "format_success",
    "format_warning",
    "format_json",
]


class OutputFormat(str, Enum):
    """Output formats of the ``show`` command."""

    TABLE = "table"
    JSON = "json"


def format_error(
    message: str, details: list[str] | None = None, suggestion: str | None = None
) -> str:
    """Format an error message with optional details and suggestion.

    Example:
        >>> print(format_error("Invalid schema", details=["sections.0: missing"]))
        Error: Invalid schema
          sections.0: missing
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    if suggestion:
        lines.append(f"Suggestion: {suggestion}")

    return "\n".join(lines)


def format_success(message: str) -> str:
    """Format a success message.

    Example:
        >>> format_success("Imported 3 settings")
        'Success: Imported 3 settings'
    """
    return f"Success: {message}"


def format_warning(message: str) -> str:
    return f"Warning: {message}"


def format_json(data: Any) -> str:
    """Format data as indented JSON with sorted keys.

    Raises:
        TypeError: If data is not JSON-serializable.
    """
    return json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False)
