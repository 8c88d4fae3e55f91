"""Render context handed to field strategies."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from settingsform.schema.models import FieldDefinition

__all__ = ["FieldContext"]

# Attributes a host may default through SettingsHooks.field_defaults.
_DEFAULTABLE = ("type", "title", "desc", "placeholder", "class")


@dataclass(frozen=True, slots=True)
class FieldContext:
    """Everything a strategy needs to render one field instance.

    Attributes:
        id: DOM id (the derived key, or a group subfield id).
        name: Form name (``{group}_settings[key]`` or a nested row name).
        type: Field type tag selecting the strategy.
        value: Current value (effective stored value or default).
        title: Field title.
        desc: Description markup shown under the control.
        placeholder: Placeholder text.
        css_class: CSS classes, including visibility classes.
        choices: Ordered value -> label (or optgroup/image mapping).
        subfields: Subfield definitions of a group field.
        multiple: Multi-select flag.
        default: The field's declared default (multiinputs take their titles
            from its keys).
        group_id: Owning settings group.
        options: Type-specific extra options and renderer-supplied extras.
    """

    id: str
    name: str
    type: str = "text"
    value: Any = ""
    title: str = ""
    desc: str = ""
    placeholder: str = ""
    css_class: str = ""
    choices: Mapping[str, Any] = field(default_factory=dict)
    subfields: tuple[FieldDefinition, ...] = ()
    multiple: bool = False
    default: Any = None
    group_id: str = ""
    options: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_definition(
        cls,
        definition: FieldDefinition,
        *,
        id: str,
        name: str,
        value: Any,
        group_id: str = "",
        extra_class: str = "",
        defaults: Mapping[str, Any] | None = None,
        extras: Mapping[str, Any] | None = None,
    ) -> FieldContext:
        """Build a context from a field definition.

        Args:
            definition: The schema field.
            id: DOM id to render with.
            name: Form name to render with.
            value: Current value.
            group_id: Owning settings group.
            extra_class: Classes appended to the field's own classes.
            defaults: Host defaults for attributes the field left unset.
            extras: Renderer-supplied options (export URL, tokens, ...).
        """
        explicit = definition.model_fields_set | set(definition.options)
        attrs: dict[str, Any] = {
            "type": definition.type,
            "title": definition.title,
            "desc": definition.desc,
            "placeholder": definition.placeholder,
            "class": definition.css_class,
        }
        options: dict[str, Any] = {}
        for key, default in (defaults or {}).items():
            if key in _DEFAULTABLE:
                attr = "css_class" if key == "class" else key
                if attr not in explicit:
                    attrs[key] = default
            elif key not in explicit:
                options[key] = default
        options.update(definition.options)
        options.update(extras or {})

        return cls(
            id=id,
            name=name,
            type=attrs["type"],
            value=value,
            title=attrs["title"],
            desc=attrs["desc"],
            placeholder=attrs["placeholder"],
            css_class=(attrs["class"] + extra_class).strip(),
            choices=dict(definition.choices),
            subfields=tuple(definition.subfields),
            multiple=definition.multiple,
            default=definition.default,
            group_id=group_id,
            options=options,
        )

    def derive(self, **changes: Any) -> FieldContext:
        """Copy of this context with ``changes`` applied."""
        return replace(self, **changes)
