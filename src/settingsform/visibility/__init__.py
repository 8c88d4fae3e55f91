"""Conditional visibility for fields, sections and tabs.

- expressions.py: Boolean expression tree (Const, Equals, Or, And, Not)
- compiler.py: show_if/hide_if trees -> VisibilityRule
- evaluator.py: Server-side interpreter over current form values

The expression tree is the canonical model. ``VisibilityRule.to_dict()`` is
its JSON serialization; ``VisibilityRule.css_classes()`` is the class-name
encoding consumed by the form's client script.
"""

from __future__ import annotations

from settingsform.visibility.compiler import (
    CompiledConditions,
    VisibilityRule,
    compile_conditions,
    compile_visibility,
)
from settingsform.visibility.evaluator import VisibilityEvaluator
from settingsform.visibility.expressions import (
    FALSE,
    TRUE,
    And,
    Const,
    Equals,
    Not,
    Or,
    VisibilityExpr,
    from_dict,
)

__all__: list[str] = [
    # Expression tree
    "And",
    "Const",
    "Equals",
    "FALSE",
    "Not",
    "Or",
    "TRUE",
    "VisibilityExpr",
    "from_dict",
    # Compiler
    "CompiledConditions",
    "VisibilityRule",
    "compile_conditions",
    "compile_visibility",
    # Evaluator
    "VisibilityEvaluator",
]
