"""Helpers for interpreting stored values the way an HTML form does."""

from __future__ import annotations

from typing import Any

__all__ = ["as_form_strings", "is_empty_value", "scalar_text"]


def as_form_strings(value: Any) -> list[str]:
    """Normalize a stored value into the strings a form would submit.

    ``True``/``False`` become ``"1"``/``"0"``, ``None`` becomes ``""`` and
    lists are flattened.
    """
    if value is None:
        return [""]
    if isinstance(value, bool):
        return ["1" if value else "0"]
    if isinstance(value, (list, tuple, set)):
        strings: list[str] = []
        for item in value:
            strings.extend(as_form_strings(item))
        return strings
    return [str(value)]


def is_empty_value(value: Any) -> bool:
    """Whether a value counts as empty (unchecked, unset, blank)."""
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, dict)) and not value:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return value == "0"


def scalar_text(value: Any) -> str:
    """Text shown in a single-value input; ``False``/``None`` render blank."""
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)
