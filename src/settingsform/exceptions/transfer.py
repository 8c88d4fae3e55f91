from __future__ import annotations

from settingsform.exceptions.base import SettingsFormError


class ForbiddenError(SettingsFormError):
    """Raised when a settings operation is not allowed.

    Covers a group id that does not match the active settings instance and
    missing or invalid single-use tokens. Nothing is written when this is
    raised.

    Attributes:
        message: Human-readable error message.
        group_id: Group id supplied by the caller, if any.
    """

    def __init__(self, message: str, group_id: str | None = None) -> None:
        self.group_id = group_id
        super().__init__(message)


class InvalidFormatError(SettingsFormError):
    """Raised when an import document is not a JSON object.

    Attributes:
        message: Human-readable error message.
        parse_error: The underlying decoding error, if any.
    """

    def __init__(
        self,
        message: str,
        parse_error: Exception | None = None,
    ) -> None:
        self.parse_error = parse_error
        super().__init__(message)
