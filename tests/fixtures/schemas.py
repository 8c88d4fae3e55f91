"""Schema fixtures for settingsform tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from settingsform.schema import SettingsSchema, build_schema


def tabbed_source_data() -> dict[str, Any]:
    """A two-tab schema plus one tab without sections.

    Derived keys:
        general_basic_title, general_basic_mode, general_basic_disabled,
        general_basic_extra, advanced_rows_items, advanced_rows_secret
    """
    return {
        "group_id": "my_plugin",
        "tabs": [
            {"id": "general", "title": "General"},
            {"id": "advanced", "title": "Advanced"},
            {"id": "empty", "title": "Empty"},
        ],
        "sections": [
            {
                "tab_id": "advanced",
                "section_id": "rows",
                "section_title": "Rows",
                "section_order": 2,
                "fields": [
                    {
                        "id": "items",
                        "type": "group",
                        "title": "Items",
                        "subfields": [
                            {"id": "name", "type": "text", "title": "Name"},
                            {"id": "qty", "type": "number", "title": "Qty"},
                        ],
                    },
                    {"id": "secret", "type": "hidden", "default": "abc"},
                ],
            },
            {
                "tab_id": "general",
                "section_id": "basic",
                "section_title": "Basic",
                "section_order": 1,
                "section_description": "<em>Basic</em> options",
                "fields": [
                    {
                        "id": "title",
                        "type": "text",
                        "title": "Title",
                        "default": "foo",
                    },
                    {
                        "id": "mode",
                        "type": "select",
                        "title": "Mode",
                        "choices": {"simple": "Simple", "advanced": "Advanced"},
                        "default": "simple",
                    },
                    {"id": "disabled", "type": "checkbox", "title": "Disabled"},
                    {
                        "id": "extra",
                        "type": "text",
                        "title": "Extra",
                        "show_if": [
                            {"field": "general_basic_mode", "value": ["advanced"]}
                        ],
                        "hide_if": [
                            {"field": "general_basic_disabled", "value": ["1"]}
                        ],
                    },
                ],
            },
        ],
    }


def tabless_source_data() -> dict[str, Any]:
    return {
        "group_id": "simple",
        "sections": [
            {
                "section_id": "general",
                "section_title": "General",
                "fields": [
                    {"id": "title", "title": "Title", "default": "foo"},
                    {"id": "enabled", "type": "toggle", "title": "Enabled"},
                ],
            }
        ],
    }


@pytest.fixture
def tabbed_source() -> dict[str, Any]:
    return tabbed_source_data()


@pytest.fixture
def tabless_source() -> dict[str, Any]:
    return tabless_source_data()


@pytest.fixture
def tabbed_schema(tabbed_source: dict[str, Any]) -> SettingsSchema:
    return build_schema(tabbed_source)


@pytest.fixture
def tabless_schema(tabless_source: dict[str, Any]) -> SettingsSchema:
    return build_schema(tabless_source)


@pytest.fixture
def schema_file(temp_dir: Path, tabbed_source: dict[str, Any]) -> Path:
    """The tabbed schema written as YAML to ``temp_dir/settings.yaml``."""
    path = temp_dir / "settings.yaml"
    path.write_text(yaml.safe_dump(tabbed_source, sort_keys=False))
    return path
