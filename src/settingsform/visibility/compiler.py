"""Compile show_if/hide_if trees into visibility rules.

A ``show_if``/``hide_if`` tree is a list of entries. Each entry is either a
clause ``{field, value: [...]}`` (true when the field holds any of the
values) or a list of clauses that must all hold. Top-level entries are
alternatives. The final rule is::

    visible = show AND NOT hide

where a missing ``show_if`` means ``True`` and a missing ``hide_if`` means
``False``. A clause without values contributes nothing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from settingsform.schema.models import ConditionClause, ConditionTree
from settingsform.visibility.expressions import (
    FALSE,
    TRUE,
    Equals,
    VisibilityExpr,
    all_of,
    any_of,
    negate,
)

__all__ = [
    "CompiledConditions",
    "VisibilityRule",
    "compile_conditions",
    "compile_visibility",
]

# An alternative is an AND group of clauses that each carry values.
Alternative = tuple[ConditionClause, ...]


@dataclass(frozen=True, slots=True)
class CompiledConditions:
    """One compiled ``show_if`` or ``hide_if`` tree.

    Attributes:
        kind: "show_if" or "hide_if".
        declared: Whether the item declared the tree at all.
        alternatives: OR-ed alternatives, each an AND group of clauses.
    """

    kind: str
    declared: bool
    alternatives: tuple[Alternative, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.alternatives

    def expression(self) -> VisibilityExpr | None:
        """Expression of this tree, or None when it constrains nothing."""
        if self.is_empty:
            return None
        return any_of(
            [
                all_of([_clause_expression(clause) for clause in alternative])
                for alternative in self.alternatives
            ]
        )

    def css_classes(self) -> str:
        """Class-name encoding, e.g. `` show-if show-if--mode===a||b``."""
        if not self.declared:
            return ""
        slug = " " + self.kind.replace("_", "-")
        classes = slug
        for alternative in self.alternatives:
            encoded = "&&".join(
                f"{clause.field}==={'||'.join(clause.value)}" for clause in alternative
            )
            classes += f"{slug}--{encoded}"
        return classes


@dataclass(frozen=True, slots=True)
class VisibilityRule:
    """Compiled visibility of one field, section or tab."""

    show: CompiledConditions
    hide: CompiledConditions

    @property
    def is_conditional(self) -> bool:
        return not (self.show.is_empty and self.hide.is_empty)

    def expression(self) -> VisibilityExpr:
        """``show AND NOT hide`` with identities for missing parts."""
        show = self.show.expression() or TRUE
        hide = self.hide.expression() or FALSE
        return all_of([show, negate(hide)])

    def css_classes(self) -> str:
        """The show-if classes followed by the hide-if classes."""
        return self.show.css_classes() + self.hide.css_classes()

    def to_dict(self) -> dict[str, Any]:
        return self.expression().to_dict()


def _clause_expression(clause: ConditionClause) -> VisibilityExpr:
    return any_of([Equals(clause.field, value) for value in clause.value])


def _coerce_tree(tree: Any) -> ConditionTree | None:
    # Raw mappings (e.g. from an unvalidated tab dict) go through the model.
    if tree is None:
        return None
    if isinstance(tree, Mapping):
        tree = [tree]
    entries: ConditionTree = []
    for entry in tree:
        if isinstance(entry, ConditionClause):
            entries.append(entry)
        elif isinstance(entry, Mapping):
            entries.append(ConditionClause.model_validate(entry))
        else:
            entries.append(
                [
                    clause
                    if isinstance(clause, ConditionClause)
                    else ConditionClause.model_validate(clause)
                    for clause in entry
                ]
            )
    return entries


def compile_conditions(tree: Any, kind: str) -> CompiledConditions:
    """Compile one condition tree.

    Args:
        tree: The ``show_if``/``hide_if`` value (list, mapping or None).
        kind: "show_if" or "hide_if".

    Returns:
        The compiled conditions; clauses without values are dropped.
    """
    entries = _coerce_tree(tree)
    if entries is None:
        return CompiledConditions(kind=kind, declared=False)

    alternatives: list[Alternative] = []
    for entry in entries:
        clauses = [entry] if isinstance(entry, ConditionClause) else entry
        kept = tuple(clause for clause in clauses if clause.value)
        if kept:
            alternatives.append(kept)
    return CompiledConditions(
        kind=kind, declared=True, alternatives=tuple(alternatives)
    )


def compile_visibility(item: Any) -> VisibilityRule:
    """Compile the visibility of a field, section or tab.

    ``hide_if`` is always compiled, whether or not ``show_if`` is present.

    Args:
        item: A schema model or raw mapping with optional ``show_if`` and
            ``hide_if``.

    Example:
        >>> rule = compile_visibility(
        ...     {"show_if": [{"field": "mode", "value": ["advanced"]}]}
        ... )
        >>> rule.to_dict()
        {'op': 'eq', 'field': 'mode', 'value': 'advanced'}
    """
    if isinstance(item, Mapping):
        show_tree = item.get("show_if")
        hide_tree = item.get("hide_if")
    else:
        show_tree = getattr(item, "show_if", None)
        hide_tree = getattr(item, "hide_if", None)

    return VisibilityRule(
        show=compile_conditions(show_tree, "show_if"),
        hide=compile_conditions(hide_tree, "hide_if"),
    )
