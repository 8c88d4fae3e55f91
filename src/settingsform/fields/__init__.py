"""Field rendering.

- context.py: FieldContext handed to strategies
- registry.py: FieldRegistry mapping type tags to strategies
- builtin.py: Strategies for the built-in field types
- group.py: Repeatable group strategy
"""

from __future__ import annotations

from settingsform.fields.builtin import register_builtin_strategies
from settingsform.fields.context import FieldContext
from settingsform.fields.group import group_rows, render_group
from settingsform.fields.registry import (
    FieldRegistry,
    FieldStrategy,
    create_default_registry,
)

__all__: list[str] = [
    "FieldContext",
    "FieldRegistry",
    "FieldStrategy",
    "create_default_registry",
    "group_rows",
    "register_builtin_strategies",
    "render_group",
]
