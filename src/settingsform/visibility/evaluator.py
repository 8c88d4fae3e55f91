"""Server-side interpreter for visibility expressions.

Form values are compared as strings, the way a browser reports them:
- ``True``/``False`` become ``"1"``/``"0"`` (checkbox and toggle values)
- ``None`` becomes ``""``
- list values (checkboxes, multi-selects) match when any element matches
- a referenced field missing from the values never matches
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from settingsform.values import as_form_strings
from settingsform.visibility.compiler import compile_visibility
from settingsform.visibility.expressions import (
    And,
    Const,
    Equals,
    Not,
    Or,
    VisibilityExpr,
)

__all__ = ["VisibilityEvaluator"]


class VisibilityEvaluator:
    """Evaluates visibility expressions against current form values.

    Attributes:
        values: Mapping of derived key to current value (read-only).

    Example:
        ```python
        evaluator = VisibilityEvaluator({"general_mode": "advanced"})
        rule = compile_visibility(field)
        evaluator.evaluate(rule.expression())  # True or False
        evaluator.is_visible(field)            # same, compiled on the fly
        ```
    """

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values = values

    def evaluate(self, expr: VisibilityExpr) -> bool:
        """Evaluate ``expr``.

        Raises:
            TypeError: If ``expr`` is not a visibility expression node.
        """
        if isinstance(expr, Const):
            return expr.value
        if isinstance(expr, Equals):
            if expr.field not in self._values:
                return False
            return expr.value in as_form_strings(self._values[expr.field])
        if isinstance(expr, Or):
            return any(self.evaluate(operand) for operand in expr.operands)
        if isinstance(expr, And):
            return all(self.evaluate(operand) for operand in expr.operands)
        if isinstance(expr, Not):
            return not self.evaluate(expr.operand)
        raise TypeError(f"Not a visibility expression: {type(expr).__name__}")

    def is_visible(self, item: Any) -> bool:
        """Compile and evaluate the visibility of a field, section or tab."""
        return self.evaluate(compile_visibility(item).expression())
