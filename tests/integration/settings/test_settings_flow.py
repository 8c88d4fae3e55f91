"""End-to-end flow: load a schema, render, save, evaluate, export, import.

Uses the JSON file backend so values really travel through storage between
requests, each request using a fresh store.
"""

from __future__ import annotations

import json
from pathlib import Path
from urllib.parse import parse_qs, urlsplit

from settingsform import (
    FormRenderer,
    JsonFileOptionBackend,
    SettingsStore,
    SettingsTransfer,
    SingleUseTokenService,
    VisibilityEvaluator,
    create_default_registry,
    load_schema,
)
from settingsform.tokens import IMPORT_ACTION


def test_full_settings_round_trip(schema_file: Path, temp_dir: Path) -> None:
    """Test a save is rendered, exported and restored into another site."""
    schema = load_schema(schema_file)
    backend = JsonFileOptionBackend(temp_dir / "site-a")
    tokens = SingleUseTokenService()
    registry = create_default_registry()

    # Request 1: first render shows defaults and hides the conditional field.
    store = SettingsStore(schema, backend)
    html = FormRenderer(schema, store, registry, tokens=tokens).render_form()
    assert 'id="general_basic_title" value="foo"' in html
    extra = schema.sections[0].find_field("extra")
    assert not VisibilityEvaluator(store.read()).is_visible(extra)

    # Request 2: the form is submitted.
    store = SettingsStore(schema, backend)
    store.validate_and_persist(
        {
            "general_basic_title": "bar",
            "general_basic_mode": "advanced",
            "general_basic_disabled": "0",
            "advanced_rows_items": {
                "0": {"row_id": "0", "name": "apple", "qty": "1"},
                "3": {"row_id": "3", "name": "plum", "qty": "2"},
            },
        }
    )

    # Request 3: values, visibility and group rows reflect the save.
    store = SettingsStore(schema, backend)
    assert store.get("general_basic_title") == "bar"
    assert VisibilityEvaluator(store.read()).is_visible(extra)
    html = FormRenderer(schema, store, registry, tokens=tokens).render_form()
    assert 'name="my_plugin_settings[advanced_rows_items][1][row_id]" value="3"' in html

    # Request 4: export through the endpoint with a token from a rendered URL.
    renderer = FormRenderer(schema, store, registry, tokens=tokens)
    query = parse_qs(urlsplit(renderer.export_url()).query)
    transfer = SettingsTransfer(store, tokens=tokens)
    document = transfer.handle_export_request(
        {"token": query["token"][0], "group_id": query["group_id"][0]}
    )
    assert json.loads(document.body) == backend.get("my_plugin_settings")

    # Request 5: import into a second site.
    other_backend = JsonFileOptionBackend(temp_dir / "site-b")
    other = SettingsTransfer(SettingsStore(schema, other_backend), tokens=tokens)
    result = other.handle_import_request(
        {
            "token": tokens.issue(IMPORT_ACTION),
            "group_id": "my_plugin",
            "settings": document.body.decode("utf-8"),
        }
    )

    assert result.success
    assert SettingsStore(schema, other_backend).read() == store.read()
