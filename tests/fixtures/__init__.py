"""Shared test fixtures for the settingsform test suite.

Available Fixtures
==================

Schemas (from tests/fixtures/schemas.py)
----------------------------------------

Functions:
    tabbed_source_data: Fresh mapping for a two-tab schema ("my_plugin").
    tabless_source_data: Fresh mapping for a schema without tabs ("simple").

Fixtures:
    tabbed_source / tabless_source: The raw mappings above.
    tabbed_schema / tabless_schema: Built SettingsSchema instances.
    schema_file: Writes the tabbed source as YAML into temp_dir.

Stores (from tests/fixtures/stores.py)
--------------------------------------

Fixtures:
    memory_backend: Empty MemoryOptionBackend.
    tabbed_store / tabless_store: SettingsStore over memory_backend.
    registry: Registry with every built-in field type.

Example:
    >>> def test_defaults(tabbed_store):
    ...     assert tabbed_store.get("general_basic_title") == "foo"
"""

from __future__ import annotations

from tests.fixtures.schemas import (
    schema_file,
    tabbed_schema,
    tabbed_source,
    tabbed_source_data,
    tabless_schema,
    tabless_source,
    tabless_source_data,
)
from tests.fixtures.stores import (
    memory_backend,
    registry,
    tabbed_store,
    tabless_store,
)

__all__ = [
    # Schemas
    "tabbed_source_data",
    "tabless_source_data",
    "tabbed_source",
    "tabless_source",
    "tabbed_schema",
    "tabless_schema",
    "schema_file",
    # Stores
    "memory_backend",
    "registry",
    "tabbed_store",
    "tabless_store",
]
