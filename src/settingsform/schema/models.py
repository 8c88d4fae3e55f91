"""Pydantic models for declarative settings schemas.

This module defines the normalized in-memory representation of a settings
schema:
- ConditionClause: One ``{field, value}`` visibility clause
- LinkDefinition: Help link or tooltip attached to a field
- FieldDefinition: A field (and, for groups, its subfields)
- SectionDefinition: A titled section of fields, optionally inside a tab
- TabDefinition: A tab grouping sections
- SettingsSchema: The validated, ordered root object

Models are built by ``settingsform.schema.builder.build_schema`` which also
enforces the cross-object invariants (tab references, unique ids, unique
derived keys).
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

from settingsform.schema.keys import KeyDeriver

__all__ = [
    "ConditionClause",
    "ConditionEntry",
    "ConditionTree",
    "LinkDefinition",
    "FieldDefinition",
    "SectionDefinition",
    "TabDefinition",
    "SettingsSchema",
]


# =============================================================================
# Visibility conditions
# =============================================================================


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class ConditionClause(BaseModel):
    """A single visibility clause.

    The clause matches when the referenced field holds any of ``value``.
    A scalar ``value`` is accepted as a one-element list; values are compared
    as strings.
    """

    model_config = ConfigDict(frozen=True)

    field: str = Field(..., min_length=1)
    value: tuple[str, ...] = ()

    @field_validator("value", mode="before")
    @classmethod
    def normalize_values(cls, v: Any) -> tuple[str, ...]:
        if v is None:
            return ()
        if isinstance(v, (list, tuple, set)):
            return tuple(_stringify(item) for item in v)
        return (_stringify(v),)


# An entry of a show_if/hide_if list is a clause or an AND group of clauses.
ConditionEntry: TypeAlias = ConditionClause | list[ConditionClause]
ConditionTree: TypeAlias = list[ConditionEntry]


class _Conditional(BaseModel):
    """Mixin for schema items carrying show_if/hide_if trees."""

    show_if: ConditionTree | None = None
    hide_if: ConditionTree | None = None

    @field_validator("show_if", "hide_if", mode="before")
    @classmethod
    def wrap_single_clause(cls, v: Any) -> Any:
        # A bare {field, value} mapping is shorthand for a one-entry tree.
        if isinstance(v, dict):
            return [v]
        return v


# =============================================================================
# Fields
# =============================================================================


class LinkDefinition(BaseModel):
    """Help link shown beside a field title.

    ``type="tooltip"`` renders an info icon next to the title; ``type="link"``
    appends the link to the field subtitle.
    """

    url: str = ""
    text: str = "Learn More"
    external: bool = True
    type: Literal["tooltip", "link"] = "tooltip"


class FieldDefinition(_Conditional):
    """One settings field.

    Type specific options that the schema does not model (``datepicker``,
    ``timepicker``, ``mimetype``, ``editor_settings``, ``output``, ...) are
    kept as extra attributes and surface in ``FieldContext.options``.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    id: str = Field(..., min_length=1)
    type: str = "text"
    title: str = ""
    subtitle: str = ""
    desc: str = ""
    default: Any = None
    placeholder: str = ""
    css_class: str = Field(default="", alias="class")
    choices: dict[str, Any] = Field(default_factory=dict)
    multiple: bool = False
    subfields: list[FieldDefinition] = Field(default_factory=list)
    link: LinkDefinition | None = None

    @field_validator("choices", mode="before")
    @classmethod
    def normalize_choices(cls, v: Any) -> Any:
        """Accept list choices and coerce mapping keys to strings."""
        if v is None:
            return {}
        if isinstance(v, (list, tuple)):
            return {_stringify(item): item for item in v}
        if isinstance(v, dict):
            return {_stringify(key): value for key, value in v.items()}
        return v

    @property
    def options(self) -> dict[str, Any]:
        """Extra, type-specific options declared on the field."""
        return dict(self.model_extra or {})


# =============================================================================
# Sections and tabs
# =============================================================================


class SectionDefinition(_Conditional):
    """A titled group of fields."""

    model_config = ConfigDict(extra="ignore")

    section_id: str = Field(..., min_length=1)
    section_title: str
    section_order: int | None = None
    section_description: str = ""
    tab_id: str | None = None
    fields: list[FieldDefinition] = Field(default_factory=list)

    def find_field(self, field_id: str) -> FieldDefinition | None:
        for field in self.fields:
            if field.id == field_id:
                return field
        return None


class TabDefinition(_Conditional):
    """A tab grouping one or more sections."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1)
    title: str = ""
    css_class: str = Field(default="", alias="class")


# =============================================================================
# Schema root
# =============================================================================


class SettingsSchema(BaseModel):
    """Validated settings schema.

    ``sections`` are already in render order (stable sort on
    ``section_order``). Use ``build_schema`` rather than instantiating this
    class directly; the builder enforces invariants pydantic cannot express.
    """

    model_config = ConfigDict(frozen=True)

    group_id: str = Field(..., min_length=1)
    tabs: list[TabDefinition] = Field(default_factory=list)
    sections: list[SectionDefinition] = Field(default_factory=list)

    @property
    def has_tabs(self) -> bool:
        return bool(self.tabs)

    @property
    def option_name(self) -> str:
        """Storage key of the persisted value blob."""
        return f"{self.group_id}_settings"

    @property
    def deriver(self) -> KeyDeriver:
        return KeyDeriver(has_tabs=self.has_tabs)

    def key_for(self, section: SectionDefinition, field: FieldDefinition) -> str:
        """Derived key of ``field`` inside ``section``."""
        return self.deriver.derive(section.tab_id, section.section_id, field.id)

    def iter_fields(self) -> Iterator[tuple[SectionDefinition, FieldDefinition]]:
        """Yield ``(section, field)`` pairs in render order."""
        for section in self.sections:
            for field in section.fields:
                yield section, field

    def field_keys(self) -> list[str]:
        return [self.key_for(section, field) for section, field in self.iter_fields()]

    def sections_for_tab(self, tab_id: str) -> list[SectionDefinition]:
        return [section for section in self.sections if section.tab_id == tab_id]

    def tab_has_sections(self, tab_id: str) -> bool:
        return any(section.tab_id == tab_id for section in self.sections)

    def find_section(
        self, section_id: str, tab_id: str | None = None
    ) -> SectionDefinition | None:
        for section in self.sections:
            if section.section_id != section_id:
                continue
            if tab_id is not None and section.tab_id != tab_id:
                continue
            return section
        return None
