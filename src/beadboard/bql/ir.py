"""Immutable AST for parsed BQL queries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

Operator = Literal["=", "!=", ">", "<", ">=", "<=", "contains", "range"]


@dataclass(frozen=True)
class FieldNode:
    """A field comparison like status:open, priority:1-2 or title:*auth*."""

    field: str
    value: str
    operator: Operator = "="
    range_end: str | None = None  # range only


@dataclass(frozen=True)
class AndNode:
    """Conjunction of two expressions."""

    left: BQLNode
    right: BQLNode


@dataclass(frozen=True)
class OrNode:
    """Disjunction of two expressions."""

    left: BQLNode
    right: BQLNode


@dataclass(frozen=True)
class NotNode:
    """Negation of an expression."""

    operand: BQLNode


BQLNode = Union[FieldNode, AndNode, OrNode, NotNode]


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing a query. ``ast`` is None for an empty query."""

    success: bool
    ast: BQLNode | None = None
    error: str | None = None
    error_position: int | None = None


def collect_fields(node: BQLNode | None) -> set[str]:
    """Return all field names referenced in an AST."""
    if node is None:
        return set()
    if isinstance(node, FieldNode):
        return {node.field}
    if isinstance(node, NotNode):
        return collect_fields(node.operand)
    return collect_fields(node.left) | collect_fields(node.right)


_OPERATOR_PREFIX = {
    "=": "",
    "!=": "!",
    ">": ">",
    "<": "<",
    ">=": ">=",
    "<=": "<=",
}


def to_query_string(node: BQLNode) -> str:
    """Render an AST back to BQL, parenthesising every binary node."""
    if isinstance(node, FieldNode):
        if node.operator == "range":
            value = f"{node.value}-{node.range_end}"
        elif node.operator == "contains":
            value = f"*{node.value}*"
        else:
            value = _OPERATOR_PREFIX[node.operator] + node.value
        return value if node.field == "_text" else f"{node.field}:{value}"
    if isinstance(node, NotNode):
        return f"NOT {to_query_string(node.operand)}"
    keyword = "AND" if isinstance(node, AndNode) else "OR"
    return f"({to_query_string(node.left)} {keyword} {to_query_string(node.right)})"
