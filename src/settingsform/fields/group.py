"""Repeatable group field.

A group renders its subfields once per stored row, plus a blank row kept in
a ``<script type="text/html">`` template that the client clones to add rows.
Every row carries a hidden ``row_id`` input so rows keep their identity
when others are removed and indexes are no longer contiguous.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from settingsform.fields.context import FieldContext
from settingsform.schema.keys import subfield_id, subfield_name
from settingsform.templating import render_template

if TYPE_CHECKING:
    from settingsform.fields.registry import FieldRegistry

__all__ = ["group_rows", "render_group", "render_group_row"]


def group_rows(value: Any) -> list[Mapping[str, Any]]:
    """Stored rows in stored order.

    Rows may be stored as a list or as a mapping keyed by (possibly
    non-contiguous) row index. Anything that is not a row mapping is read as
    an empty row.
    """
    if isinstance(value, Mapping):
        items = list(value.values())
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        items = []
    return [item if isinstance(item, Mapping) else {} for item in items]


def render_group_row(
    ctx: FieldContext,
    registry: FieldRegistry,
    row: int,
    stored: Mapping[str, Any] | None,
) -> Markup:
    """Render one row; ``stored=None`` renders the blank template row."""
    if not ctx.subfields:
        return Markup("")

    if stored is None:
        row_id: Any = ""
    else:
        row_id = stored.get("row_id") or row

    defaults = ctx.options.get("field_defaults")
    cells = []
    for definition in ctx.subfields:
        value = "" if stored is None else stored.get(definition.id, "")
        sub_ctx = FieldContext.from_definition(
            definition,
            id=subfield_id(ctx.id, row, definition.id),
            name=subfield_name(ctx.name, row, definition.id),
            value=value,
            group_id=ctx.group_id,
            defaults=defaults,
            extras={"field_defaults": defaults} if defaults else None,
        )
        cells.append(
            {
                "id": sub_ctx.id,
                "type": sub_ctx.type,
                "title": sub_ctx.title,
                "markup": registry.render(sub_ctx),
            }
        )

    return render_template(
        "fields/group_row.html.j2", ctx=ctx, row=row, row_id=row_id, cells=cells
    )


def render_group(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """Group strategy: stored rows (at least one) and the blank template row."""
    rows = group_rows(ctx.value)
    rendered = [
        render_group_row(ctx, registry, index, stored)
        for index, stored in enumerate(rows or [{}])
    ]
    return render_template(
        "fields/group.html.j2",
        ctx=ctx,
        rows=rendered,
        template_row=render_group_row(ctx, registry, 0, None),
        desc=ctx.desc,
    )
