from __future__ import annotations

from settingsform.exceptions.base import SettingsFormError


class StrategyNotFoundError(SettingsFormError):
    """Raised when no strategy is registered for a field type.

    Only the strict lookup (``FieldRegistry.get``) raises this; rendering an
    unknown type is not fatal and produces empty markup.

    Attributes:
        field_type: The field type tag that was looked up.
        available_types: Registered field types at lookup time.
    """

    def __init__(self, field_type: str, available_types: list[str]) -> None:
        self.field_type = field_type
        self.available_types = available_types
        available = ", ".join(available_types) if available_types else "(none)"
        super().__init__(
            f"No field strategy registered for type '{field_type}'. "
            f"Available types: {available}"
        )


class DuplicateStrategyError(SettingsFormError):
    """Raised when a field type is registered twice without ``replace=True``.

    Attributes:
        field_type: The field type tag registered twice.
    """

    def __init__(self, field_type: str) -> None:
        self.field_type = field_type
        super().__init__(
            f"A field strategy for type '{field_type}' is already registered"
        )
