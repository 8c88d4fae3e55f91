from __future__ import annotations

from typing import Any

from settingsform.exceptions.base import SettingsFormError


class ValidationFailedError(SettingsFormError):
    """Raised when a validation hook rejects submitted settings.

    Persistence is aborted and the stored values stay untouched.

    Attributes:
        message: Human-readable error message.
        errors: Optional mapping of derived key to error description.

    Example:
        ```python
        def require_email(values):
            if not values.get("general_contact_email"):
                raise ValidationFailedError(
                    "Contact email is required",
                    errors={"general_contact_email": "required"},
                )
            return values
        ```
    """

    def __init__(
        self,
        message: str,
        errors: dict[str, Any] | None = None,
    ) -> None:
        self.errors = errors or {}
        super().__init__(message)
