"""Visibility expression tree.

A compiled visibility rule is a small boolean expression over the current
form values:

    Const(True)                       always
    Equals("mode", "advanced")        values["mode"] == "advanced"
    Or((a, b))                        a or b
    And((a, b))                       a and b
    Not(a)                            not a

The tree is the canonical model; ``to_dict()`` gives its JSON-friendly
serialization for client-side interpreters.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

__all__ = [
    "Const",
    "Equals",
    "Or",
    "And",
    "Not",
    "VisibilityExpr",
    "TRUE",
    "FALSE",
    "any_of",
    "all_of",
    "negate",
    "from_dict",
]


@dataclass(frozen=True, slots=True)
class Const:
    """Constant truth value."""

    value: bool

    def to_dict(self) -> dict[str, Any]:
        return {"op": "const", "value": self.value}


@dataclass(frozen=True, slots=True)
class Equals:
    """Matches when ``field`` currently holds ``value``.

    Attributes:
        field: Derived key (DOM id) of the referenced field.
        value: Expected value, compared as a string.
    """

    field: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"op": "eq", "field": self.field, "value": self.value}


@dataclass(frozen=True, slots=True)
class Or:
    """True when any operand is true."""

    operands: tuple[VisibilityExpr, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"op": "or", "args": [operand.to_dict() for operand in self.operands]}


@dataclass(frozen=True, slots=True)
class And:
    """True when every operand is true."""

    operands: tuple[VisibilityExpr, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"op": "and", "args": [operand.to_dict() for operand in self.operands]}


@dataclass(frozen=True, slots=True)
class Not:
    """Negation of its operand."""

    operand: VisibilityExpr

    def to_dict(self) -> dict[str, Any]:
        return {"op": "not", "arg": self.operand.to_dict()}


VisibilityExpr: TypeAlias = Const | Equals | Or | And | Not

TRUE = Const(True)
FALSE = Const(False)


def any_of(operands: list[VisibilityExpr]) -> VisibilityExpr:
    """Build an OR node, collapsing trivial cases.

    An empty list yields ``FALSE`` (the identity of OR); one operand is
    returned unchanged.
    """
    if not operands:
        return FALSE
    if len(operands) == 1:
        return operands[0]
    return Or(tuple(operands))


def all_of(operands: list[VisibilityExpr]) -> VisibilityExpr:
    """Build an AND node; ``TRUE`` for no operands, ``TRUE`` operands dropped."""
    kept = [operand for operand in operands if operand != TRUE]
    if not kept:
        return TRUE
    if len(kept) == 1:
        return kept[0]
    return And(tuple(kept))


def negate(operand: VisibilityExpr) -> VisibilityExpr:
    if isinstance(operand, Const):
        return Const(not operand.value)
    if isinstance(operand, Not):
        return operand.operand
    return Not(operand)


def from_dict(data: dict[str, Any]) -> VisibilityExpr:
    """Rebuild an expression from its ``to_dict()`` form.

    Raises:
        ValueError: If ``data`` does not describe a known node.
    """
    op = data.get("op")
    if op == "const":
        return Const(bool(data["value"]))
    if op == "eq":
        return Equals(str(data["field"]), str(data["value"]))
    if op == "or":
        return Or(tuple(from_dict(arg) for arg in data["args"]))
    if op == "and":
        return And(tuple(from_dict(arg) for arg in data["args"]))
    if op == "not":
        return Not(from_dict(data["arg"]))
    raise ValueError(f"Unknown visibility expression node: {op!r}")
