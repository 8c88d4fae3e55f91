from __future__ import annotations

from settingsform.exceptions.base import SettingsFormError


class SchemaError(SettingsFormError):
    """Exception for malformed settings schemas.

    Raised while building a schema when the group id is missing, a section
    lacks its id or title, a tab reference dangles, ids are duplicated, or two
    fields would share a derived key. Schema errors are fatal at startup.

    Attributes:
        message: Human-readable error message.
        location: Optional dotted path of the offending element
            (e.g. "sections.2.fields.0").
    """

    def __init__(self, message: str, location: str | None = None) -> None:
        """Initialize the SchemaError.

        Args:
            message: Human-readable error message.
            location: Optional dotted path of the offending element.
        """
        self.location = location
        super().__init__(message)


class KeyDerivationError(SchemaError):
    """Raised when tabbed and tabless key derivation would be mixed.

    A schema derives every key with the same has-tabs decision. Asking a
    tabbed deriver for a key without a tab id (or a tabless one with a tab id)
    would orphan stored values, so it is refused.
    """
