"""Unit tests for the repeatable group field."""

from __future__ import annotations

from typing import Any

from settingsform.fields import FieldContext, FieldRegistry, group_rows
from settingsform.fields.group import render_group_row
from settingsform.schema import FieldDefinition

SUBFIELDS = (
    FieldDefinition(id="name", type="text", title="Name"),
    FieldDefinition(id="qty", type="number", title="Qty"),
)


def _group(value: Any = None, **attrs: Any) -> FieldContext:
    return FieldContext(
        id="rows_items",
        name="g_settings[rows_items]",
        type="group",
        value=value if value is not None else False,
        subfields=SUBFIELDS,
        group_id="g",
        **attrs,
    )


class TestGroupRows:
    """Tests for group_rows."""

    def test_list(self) -> None:
        """Test list rows keep their order."""
        assert group_rows([{"a": 1}, {"a": 2}]) == [{"a": 1}, {"a": 2}]

    def test_mapping_keyed_by_index(self) -> None:
        """Test non-contiguous index mappings keep stored order."""
        rows = group_rows({"0": {"a": 1}, "4": {"a": 2}})

        assert rows == [{"a": 1}, {"a": 2}]

    def test_unset(self) -> None:
        """Test unset values have no rows."""
        assert group_rows(False) == []
        assert group_rows("") == []

    def test_non_mapping_rows_are_blank(self) -> None:
        """Test garbage rows read as empty rows."""
        assert group_rows(["x", {"a": 1}]) == [{}, {"a": 1}]


class TestRenderGroup:
    """Tests for rendering a group."""

    def test_stored_rows_with_row_ids(self, registry: FieldRegistry) -> None:
        """Test each stored row renders once and keeps its row id."""
        stored = {
            "0": {"row_id": 0, "name": "apple", "qty": 1},
            "2": {"row_id": 2, "name": "pear", "qty": 4},
            "5": {"row_id": 5, "name": "plum", "qty": 9},
        }

        html = registry.render(_group(stored))

        assert 'name="g_settings[rows_items][0][row_id]" value="0"' in html
        assert 'name="g_settings[rows_items][1][row_id]" value="2"' in html
        assert 'name="g_settings[rows_items][2][row_id]" value="5"' in html
        assert 'name="g_settings[rows_items][1][name]"' in html
        assert 'id="rows_items_1_name" value="pear"' in html
        assert 'id="rows_items_2_qty" value="9"' in html

    def test_template_row(self, registry: FieldRegistry) -> None:
        """Test the blank template row sits in a script block."""
        html = registry.render(_group([{"name": "apple"}]))

        template = html.split('<script type="text/html" id="rows_items_template">')[1]
        assert 'name="g_settings[rows_items][0][row_id]" value=""' in template
        assert 'id="rows_items_0_name" value=""' in template
        assert "apple" not in template

    def test_empty_group_renders_one_blank_row(self, registry: FieldRegistry) -> None:
        """Test a group without rows still shows one row to fill in."""
        html = registry.render(_group())

        # One visible row plus the template row.
        assert html.count('class="wpsf-group__row-id"') == 2
        assert html.count("wpsf-group__row alternate") == 2

    def test_alternate_rows(self, registry: FieldRegistry) -> None:
        """Test even rows are striped."""
        html = registry.render(_group([{}, {}, {}]))

        # Rows 0 and 2 plus the template row.
        assert html.count("wpsf-group__row alternate") == 3

    def test_subfield_labels(self, registry: FieldRegistry) -> None:
        """Test subfields are labelled by their titles."""
        html = registry.render(_group([{}]))

        assert '<label for="rows_items_0_qty" class="wpsf-group__field-label">' in html
        assert "wpsf-group__field-wrapper--number" in html

    def test_field_defaults_reach_subfields(self, registry: FieldRegistry) -> None:
        """Test host field defaults apply inside group rows."""
        ctx = _group([{}], options={"field_defaults": {"placeholder": "Type"}})

        html = registry.render(ctx)

        assert 'placeholder="Type"' in html

    def test_nested_group(self, registry: FieldRegistry) -> None:
        """Test groups nest with nested names."""
        inner = FieldDefinition.model_validate(
            {"id": "tags", "type": "group", "subfields": [{"id": "tag"}]}
        )
        ctx = FieldContext(
            id="rows_items",
            name="g_settings[rows_items]",
            type="group",
            value=[{"tags": [{"tag": "x"}]}],
            subfields=(inner,),
        )

        html = registry.render(ctx)

        assert 'name="g_settings[rows_items][0][tags][0][tag]"' in html
        assert 'id="rows_items_0_tags_0_tag" value="x"' in html

    def test_no_subfields(self, registry: FieldRegistry) -> None:
        """Test a row of a group without subfields is empty."""
        ctx = FieldContext(id="g", name="n", type="group")

        assert render_group_row(ctx, registry, 0, {}) == ""
