"""Schema model and key derivation.

- models.py: Pydantic models for tabs, sections, fields and conditions
- builder.py: Build and validate schemas from mappings or YAML/JSON files
- keys.py: Derived keys, form names and group subfield naming
"""

from __future__ import annotations

from settingsform.schema.builder import (
    build_schema,
    load_schema,
    order_sections,
    parse_source,
)
from settingsform.schema.keys import (
    KeyDeriver,
    derive_key,
    field_name,
    option_name,
    subfield_id,
    subfield_name,
)
from settingsform.schema.models import (
    ConditionClause,
    ConditionEntry,
    ConditionTree,
    FieldDefinition,
    LinkDefinition,
    SectionDefinition,
    SettingsSchema,
    TabDefinition,
)

__all__: list[str] = [
    # Models
    "ConditionClause",
    "ConditionEntry",
    "ConditionTree",
    "FieldDefinition",
    "LinkDefinition",
    "SectionDefinition",
    "SettingsSchema",
    "TabDefinition",
    # Builder
    "build_schema",
    "load_schema",
    "order_sections",
    "parse_source",
    # Keys
    "KeyDeriver",
    "derive_key",
    "field_name",
    "option_name",
    "subfield_id",
    "subfield_name",
]
