"""Built-in field strategies.

Each strategy renders one field type from its ``FieldContext``:

- Inputs: text, hidden, number, password, time, date
- Text areas: textarea, code_editor, editor
- Choices: select, radio, checkbox, toggle, checkboxes,
  image_radio, image_checkboxes
- Widgets: color, file, multiinputs
- Transfer: export, import
- Other: custom, group (see ``settingsform.fields.group``)

``register_builtin_strategies`` registers all of them on a registry.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from markupsafe import Markup

from settingsform.fields.context import FieldContext
from settingsform.fields.group import render_group
from settingsform.fields.registry import FieldRegistry
from settingsform.templating import render_template
from settingsform.values import as_form_strings, is_empty_value, scalar_text

__all__ = [
    "register_builtin_strategies",
    "render_text",
    "render_hidden",
    "render_number",
    "render_password",
    "render_time",
    "render_date",
    "render_textarea",
    "render_code_editor",
    "render_editor",
    "render_select",
    "render_radio",
    "render_checkbox",
    "render_toggle",
    "render_checkboxes",
    "render_image_radio",
    "render_image_checkboxes",
    "render_color",
    "render_file",
    "render_multiinputs",
    "render_export",
    "render_import",
    "render_custom",
]

DEFAULT_EXPORT_LABEL = "Export Settings"
DEFAULT_IMPORT_LABEL = "Import Settings"
DEFAULT_BROWSE_LABEL = "Browse"


def _json_attr(value: Any) -> str:
    """JSON for a ``data-*`` attribute, ``""`` when the option is unset."""
    if is_empty_value(value):
        return ""
    return json.dumps(value, sort_keys=True)


def _input(
    ctx: FieldContext,
    input_type: str,
    base_class: str,
    *,
    placeholder: bool = True,
    with_desc: bool = True,
    data_name: str = "",
    data_value: str = "",
) -> Markup:
    return render_template(
        "fields/input.html.j2",
        ctx=ctx,
        input_type=input_type,
        value=scalar_text(ctx.value),
        placeholder=placeholder,
        base_class=base_class,
        with_desc=with_desc,
        desc=ctx.desc,
        data_name=data_name,
        data_value=data_value,
    )


# =============================================================================
# Inputs
# =============================================================================


def render_text(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    return _input(ctx, "text", "regular-text")


def render_hidden(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    return _input(ctx, "hidden", "hidden-field", placeholder=False, with_desc=False)


def render_number(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    return _input(ctx, "number", "regular-text")


def render_password(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    return _input(ctx, "password", "regular-text")


def render_time(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """Time input; ``timepicker`` options go to ``data-timepicker``."""
    return _input(
        ctx,
        "time",
        "timepicker",
        placeholder=False,
        data_name="timepicker",
        data_value=_json_attr(ctx.options.get("timepicker")),
    )


def render_date(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """Date input; ``datepicker`` options go to ``data-datepicker``."""
    return _input(
        ctx,
        "date",
        "datepicker",
        placeholder=False,
        data_name="datepicker",
        data_value=_json_attr(ctx.options.get("datepicker")),
    )


# =============================================================================
# Text areas
# =============================================================================


def _textarea(
    ctx: FieldContext, css: str, data_name: str = "", data_value: str = ""
) -> Markup:
    return render_template(
        "fields/textarea.html.j2",
        ctx=ctx,
        value=scalar_text(ctx.value),
        css=css,
        desc=ctx.desc,
        data_name=data_name,
        data_value=data_value,
    )


def render_textarea(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    return _textarea(ctx, ctx.css_class)


def render_code_editor(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """Textarea picked up by the client code editor for ``mimetype``."""
    mimetype = ctx.options.get("mimetype") or "text/plain"
    return _textarea(
        ctx,
        f"wpsf-code-editor {ctx.css_class}".strip(),
        data_name="code-editor",
        data_value=json.dumps({"type": mimetype}),
    )


def render_editor(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """Rich text editor textarea; ``editor_settings`` are passed through."""
    settings = dict(ctx.options.get("editor_settings") or {})
    settings["textarea_name"] = ctx.name
    return _textarea(
        ctx,
        f"wpsf-editor {ctx.css_class}".strip(),
        data_name="editor-settings",
        data_value=json.dumps(settings, sort_keys=True),
    )


# =============================================================================
# Choices
# =============================================================================


def _choice_label(label: Any) -> str:
    if isinstance(label, Mapping):
        return str(label.get("text", ""))
    return scalar_text(label)


def render_select(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """Select box; a mapping choice renders as an optgroup."""
    selected = set(as_form_strings(ctx.value))
    options: list[dict[str, Any]] = []
    for value, label in ctx.choices.items():
        if isinstance(label, Mapping):
            options.append(
                {
                    "group": True,
                    "label": value,
                    "choices": [
                        {
                            "value": str(sub_value),
                            "label": scalar_text(sub_label),
                            "selected": str(sub_value) in selected,
                        }
                        for sub_value, sub_label in label.items()
                    ],
                }
            )
            continue
        options.append(
            {
                "group": False,
                "value": value,
                "label": scalar_text(label),
                "selected": value in selected,
            }
        )
    return render_template(
        "fields/select.html.j2", ctx=ctx, options=options, desc=ctx.desc
    )


def render_radio(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    current = scalar_text(ctx.value)
    options = [
        {"value": value, "label": _choice_label(label), "selected": value == current}
        for value, label in ctx.choices.items()
    ]
    return render_template(
        "fields/radio.html.j2", ctx=ctx, options=options, desc=ctx.desc
    )


def render_checkbox(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """Single checkbox; the description is rendered as its label."""
    return render_template(
        "fields/checkbox.html.j2",
        ctx=ctx,
        switch=False,
        checked=not is_empty_value(ctx.value),
        desc=ctx.desc,
    )


def render_toggle(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    return render_template(
        "fields/checkbox.html.j2",
        ctx=ctx,
        switch=True,
        checked=not is_empty_value(ctx.value),
        desc=ctx.desc,
    )


def render_checkboxes(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """Checkbox list; only list values count as checked."""
    checked = set(as_form_strings(ctx.value)) if isinstance(ctx.value, list) else set()
    options = [
        {"value": value, "label": _choice_label(label), "selected": value in checked}
        for value, label in ctx.choices.items()
    ]
    return render_template(
        "fields/checkboxes.html.j2", ctx=ctx, options=options, desc=ctx.desc
    )


def _image_options(ctx: FieldContext, selected: set[str]) -> list[dict[str, Any]]:
    options = []
    for value, choice in ctx.choices.items():
        choice = choice if isinstance(choice, Mapping) else {"text": choice}
        options.append(
            {
                "value": value,
                "image": choice.get("image", ""),
                "label": scalar_text(choice.get("text", "")),
                "selected": value in selected,
            }
        )
    return options


def render_image_radio(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    return render_template(
        "fields/image_choices.html.j2",
        ctx=ctx,
        multiple=False,
        variant="image-radio",
        options=_image_options(ctx, {scalar_text(ctx.value)}),
        desc=ctx.desc,
    )


def render_image_checkboxes(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    selected = set(as_form_strings(ctx.value)) if isinstance(ctx.value, list) else set()
    return render_template(
        "fields/image_choices.html.j2",
        ctx=ctx,
        multiple=True,
        variant="image-checkboxes",
        options=_image_options(ctx, selected),
        desc=ctx.desc,
    )


# =============================================================================
# Widgets
# =============================================================================


def render_color(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    return render_template(
        "fields/color.html.j2", ctx=ctx, value=scalar_text(ctx.value), desc=ctx.desc
    )


def render_file(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    return render_template(
        "fields/file.html.j2",
        ctx=ctx,
        value=scalar_text(ctx.value),
        browse_label=ctx.options.get("browse_label", DEFAULT_BROWSE_LABEL),
        desc=ctx.desc,
    )


def render_multiinputs(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """One text input per value; titles are the keys of the default mapping."""
    value = ctx.value
    if isinstance(value, Mapping):
        values = list(value.values())
    elif isinstance(value, (list, tuple)):
        values = list(value)
    else:
        values = []
    titles = list(ctx.default) if isinstance(ctx.default, Mapping) else []

    items = [
        {
            "value": scalar_text(item),
            "title": titles[index] if index < len(titles) else "",
        }
        for index, item in enumerate(values)
    ]
    return render_template(
        "fields/multiinputs.html.j2", ctx=ctx, items=items, desc=ctx.desc
    )


# =============================================================================
# Transfer
# =============================================================================


def render_export(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """Export button linking to ``options["export_url"]``."""
    return render_template(
        "fields/export.html.j2",
        ctx=ctx,
        url=ctx.options.get("export_url", ""),
        label=scalar_text(ctx.value) or DEFAULT_EXPORT_LABEL,
        desc=ctx.desc,
    )


def render_import(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """File picker posting to the import handler with ``options["import_token"]``."""
    return render_template(
        "fields/import.html.j2",
        ctx=ctx,
        token=ctx.options.get("import_token", ""),
        label=scalar_text(ctx.value) or DEFAULT_IMPORT_LABEL,
        desc=ctx.desc,
    )


# =============================================================================
# Custom
# =============================================================================


def render_custom(ctx: FieldContext, registry: FieldRegistry) -> Markup:
    """Host markup from ``output``: a callable taking the context, or a string.

    Nothing is rendered when the field declares no ``output``.
    """
    if "output" not in ctx.options:
        return Markup("")
    output = ctx.options["output"]
    if callable(output):
        output = output(ctx)
    return render_template(
        "fields/custom.html.j2", ctx=ctx, output=scalar_text(output), desc=ctx.desc
    )


def register_builtin_strategies(registry: FieldRegistry) -> None:
    """Register every built-in field type on ``registry``.

    Args:
        registry: Field registry to register strategies with.
    """
    registry.register("text", render_text)
    registry.register("hidden", render_hidden)
    registry.register("number", render_number)
    registry.register("password", render_password)
    registry.register("time", render_time)
    registry.register("date", render_date)
    registry.register("textarea", render_textarea)
    registry.register("code_editor", render_code_editor)
    registry.register("editor", render_editor)
    registry.register("select", render_select)
    registry.register("radio", render_radio)
    registry.register("checkbox", render_checkbox)
    registry.register("toggle", render_toggle)
    registry.register("checkboxes", render_checkboxes)
    registry.register("image_radio", render_image_radio)
    registry.register("image_checkboxes", render_image_checkboxes)
    registry.register("color", render_color)
    registry.register("file", render_file)
    registry.register("multiinputs", render_multiinputs)
    registry.register("export", render_export)
    registry.register("import", render_import)
    registry.register("custom", render_custom)
    registry.register("group", render_group)
