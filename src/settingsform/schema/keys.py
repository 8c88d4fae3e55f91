"""Derived key and form-name generation.

A derived key is the only join point between a schema field and its stored
value, so it must come out identical on every render and every write:

    tabbed:   {tab_id}_{section_id}_{field_id}
    tabless:  {section_id}_{field_id}

Form names and group subfield ids/names are derived from it.
"""

from __future__ import annotations

from dataclasses import dataclass

from settingsform.exceptions import KeyDerivationError

__all__ = [
    "derive_key",
    "option_name",
    "field_name",
    "subfield_id",
    "subfield_name",
    "KeyDeriver",
]


def derive_key(tab_id: str | None, section_id: str, field_id: str) -> str:
    """Build the storage key of a field.

    Args:
        tab_id: Tab id, or None for schemas without tabs.
        section_id: Section id.
        field_id: Field id.

    Returns:
        ``{tab_id}_{section_id}_{field_id}`` or ``{section_id}_{field_id}``.

    Examples:
        >>> derive_key("general", "basic", "title")
        'general_basic_title'
        >>> derive_key(None, "basic", "title")
        'basic_title'
    """
    if tab_id:
        return f"{tab_id}_{section_id}_{field_id}"
    return f"{section_id}_{field_id}"


def option_name(group_id: str) -> str:
    """Storage key of the value blob owned by ``group_id``."""
    return f"{group_id}_settings"


def field_name(group_id: str, key: str) -> str:
    """Submitted form name of a field, e.g. ``my_plugin_settings[basic_title]``."""
    return f"{option_name(group_id)}[{key}]"


def subfield_id(parent_id: str, row: int, sub_id: str) -> str:
    """DOM id of a group subfield in ``row``."""
    return f"{parent_id}_{row}_{sub_id}"


def subfield_name(parent_name: str, row: int, sub_id: str) -> str:
    """Form name of a group subfield in ``row``.

    Names nest, so a group inside a group yields
    ``opt[key][0][inner][2][sub]``.
    """
    return f"{parent_name}[{row}][{sub_id}]"


@dataclass(frozen=True, slots=True)
class KeyDeriver:
    """Key derivation bound to one schema's has-tabs decision.

    Attributes:
        has_tabs: Whether the owning schema declares tabs.
    """

    has_tabs: bool

    def derive(self, tab_id: str | None, section_id: str, field_id: str) -> str:
        """Derive a key, refusing to mix tabbed and tabless derivation.

        Raises:
            KeyDerivationError: If a tab id is missing on a tabbed schema or
                present on a tabless one.
        """
        if self.has_tabs and not tab_id:
            raise KeyDerivationError(
                f"Section '{section_id}' has no tab_id but the schema has tabs",
                location=f"{section_id}.{field_id}",
            )
        if not self.has_tabs and tab_id:
            raise KeyDerivationError(
                f"Section '{section_id}' references tab '{tab_id}' "
                "but the schema has no tabs",
                location=f"{section_id}.{field_id}",
            )
        return derive_key(tab_id, section_id, field_id)
