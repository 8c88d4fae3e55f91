"""Schema builder.

Turns a host-supplied declarative source (mapping, YAML or JSON file) into a
validated ``SettingsSchema``:
- parse_source: Parse YAML/JSON text into a mapping
- order_sections: Stable sort of sections on ``section_order``
- build_schema: Validate and normalize a mapping into a schema
- load_schema: Read and build a schema file
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from settingsform.exceptions import SchemaError
from settingsform.logging import get_logger
from settingsform.schema.models import (
    FieldDefinition,
    SectionDefinition,
    SettingsSchema,
    TabDefinition,
)

__all__ = [
    "parse_source",
    "order_sections",
    "build_schema",
    "load_schema",
]

logger = get_logger(__name__)


def parse_source(content: str) -> dict[str, Any]:
    """Parse YAML (or JSON, which is valid YAML) schema text.

    Raises:
        SchemaError: If the text is empty, malformed, or not a mapping.
    """
    if not content or content.isspace():
        raise SchemaError("Empty schema source")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        location = None
        if hasattr(e, "problem_mark") and e.problem_mark is not None:
            location = f"line {e.problem_mark.line + 1}"
        raise SchemaError(f"Schema syntax error: {e}", location=location) from e

    if not isinstance(data, dict):
        raise SchemaError(
            f"Schema source must be a mapping, got {type(data).__name__}"
        )
    return data


def order_sections(sections: list[SectionDefinition]) -> list[SectionDefinition]:
    """Sort sections on ``section_order`` with a stable sort.

    A section without an order takes the order of the section declared just
    before it (0 for a leading section), so it stays attached to its
    predecessor. Ties keep declaration order.

    Example:
        [A(2), B(1), C(-)] -> [B, C, A]
    """
    effective: list[int] = []
    previous = 0
    for section in sections:
        if section.section_order is not None:
            previous = section.section_order
        effective.append(previous)

    order = sorted(range(len(sections)), key=lambda index: effective[index])
    return [sections[index] for index in order]


def _check_required_section_keys(raw_sections: Any) -> None:
    if not isinstance(raw_sections, list):
        raise SchemaError(
            f"'sections' must be a list, got {type(raw_sections).__name__}",
            location="sections",
        )
    for index, raw in enumerate(raw_sections):
        if not isinstance(raw, Mapping):
            raise SchemaError(
                f"Section must be a mapping, got {type(raw).__name__}",
                location=f"sections.{index}",
            )
        if not raw.get("section_id"):
            raise SchemaError(
                "Section is missing 'section_id'", location=f"sections.{index}"
            )
        if "section_title" not in raw or raw["section_title"] is None:
            raise SchemaError(
                f"Section '{raw['section_id']}' is missing 'section_title'",
                location=f"sections.{index}",
            )


def _check_unique_field_ids(
    fields: list[FieldDefinition], location: str
) -> None:
    seen: set[str] = set()
    for field in fields:
        if field.id in seen:
            raise SchemaError(
                f"Duplicate field id '{field.id}'", location=location
            )
        seen.add(field.id)
        if field.subfields:
            _check_unique_field_ids(field.subfields, f"{location}.{field.id}")


def _check_tabs(tabs: list[TabDefinition], sections: list[SectionDefinition]) -> None:
    tab_ids: set[str] = set()
    for tab in tabs:
        if tab.id in tab_ids:
            raise SchemaError(f"Duplicate tab id '{tab.id}'", location="tabs")
        tab_ids.add(tab.id)

    for section in sections:
        if not section.tab_id:
            raise SchemaError(
                f"Section '{section.section_id}' needs a 'tab_id' "
                "because the schema has tabs",
                location=f"sections.{section.section_id}",
            )
        if section.tab_id not in tab_ids:
            raise SchemaError(
                f"Section '{section.section_id}' references undefined tab "
                f"'{section.tab_id}'",
                location=f"sections.{section.section_id}",
            )


def _check_unique_sections(sections: list[SectionDefinition]) -> None:
    seen: set[tuple[str | None, str]] = set()
    for section in sections:
        marker = (section.tab_id, section.section_id)
        if marker in seen:
            scope = f" in tab '{section.tab_id}'" if section.tab_id else ""
            raise SchemaError(
                f"Duplicate section id '{section.section_id}'{scope}",
                location=f"sections.{section.section_id}",
            )
        seen.add(marker)


def _check_unique_keys(schema: SettingsSchema) -> None:
    owners: dict[str, str] = {}
    for section, field in schema.iter_fields():
        key = schema.key_for(section, field)
        owner = f"{section.tab_id or '-'}/{section.section_id}/{field.id}"
        if key in owners:
            raise SchemaError(
                f"Derived key '{key}' of {owner} collides with {owners[key]}",
                location=f"sections.{section.section_id}.{field.id}",
            )
        owners[key] = owner


def build_schema(source: Mapping[str, Any]) -> SettingsSchema:
    """Validate a declarative source and build the schema.

    Args:
        source: Mapping with ``group_id``, optional ``tabs`` and ``sections``.

    Returns:
        The validated schema with sections in render order.

    Raises:
        SchemaError: If the group id is missing, a section lacks its id or
            title, a tab reference is missing or dangles, ids repeat, derived
            keys collide, or a value has the wrong shape.

    Example:
        >>> schema = build_schema({
        ...     "group_id": "my_plugin",
        ...     "sections": [{
        ...         "section_id": "general",
        ...         "section_title": "General",
        ...         "fields": [{"id": "title", "type": "text"}],
        ...     }],
        ... })
        >>> schema.field_keys()
        ['general_title']
    """
    if not isinstance(source, Mapping):
        raise SchemaError(
            f"Schema source must be a mapping, got {type(source).__name__}"
        )

    group_id = source.get("group_id")
    if not isinstance(group_id, str) or not group_id.strip():
        raise SchemaError("Schema is missing 'group_id'", location="group_id")

    raw_sections = source.get("sections") or []
    _check_required_section_keys(raw_sections)

    try:
        tabs = [TabDefinition.model_validate(raw) for raw in source.get("tabs") or []]
        sections = [SectionDefinition.model_validate(raw) for raw in raw_sections]
    except ValidationError as e:
        details = []
        for error in e.errors():
            loc = ".".join(str(part) for part in error["loc"])
            details.append(f"{loc}: {error['msg']}")
        raise SchemaError(
            f"Schema validation failed: {'; '.join(details)}"
        ) from e

    if tabs:
        _check_tabs(tabs, sections)
    else:
        for index, section in enumerate(sections):
            if section.tab_id:
                logger.debug(
                    "tab_id_ignored",
                    section_id=section.section_id,
                    tab_id=section.tab_id,
                )
                sections[index] = section.model_copy(update={"tab_id": None})

    _check_unique_sections(sections)
    for section in sections:
        _check_unique_field_ids(section.fields, f"sections.{section.section_id}")

    schema = SettingsSchema(
        group_id=group_id,
        tabs=tabs,
        sections=order_sections(sections),
    )
    _check_unique_keys(schema)

    logger.debug(
        "schema_built",
        group_id=schema.group_id,
        tabs=len(schema.tabs),
        sections=len(schema.sections),
    )
    return schema


def load_schema(path: Path | str) -> SettingsSchema:
    """Read a YAML or JSON schema file and build it.

    Raises:
        SchemaError: If the file cannot be read or the schema is invalid.
    """
    schema_path = Path(path)
    try:
        content = schema_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(
            f"Cannot read schema file {schema_path}: {e}",
            location=str(schema_path),
        ) from e
    return build_schema(parse_source(content))
