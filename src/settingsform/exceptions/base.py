from __future__ import annotations


class SettingsFormError(Exception):
    """Base exception class for all settingsform errors.

    Every custom exception in the package inherits from this class so hosts
    can catch settings failures at their request boundary while letting
    system exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            store.validate_and_persist(form_data)
        except SettingsFormError as e:
            logger.error("settings_save_failed", error=e.message)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the SettingsFormError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
