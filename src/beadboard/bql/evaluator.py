"""BQL evaluator: resolves item fields and walks the AST."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from beadboard.bql.ir import AndNode, BQLNode, FieldNode, NotNode, OrNode
from beadboard.bql.tokens import TEXT_FIELD
from beadboard.models import WorkItem
from beadboard.utils.constants import normalize_priority

# Query value standing in for "the current user" on assignee filters.
CURRENT_USER = "@me"

# ---------------------------------------------------------------------------
# Field resolution
# ---------------------------------------------------------------------------


def _bool_text(flag: bool) -> str:
    return "true" if flag else "false"


def _text(item: WorkItem) -> str:
    return f"{item.title or ''} {item.description or ''}"


def _status(item: WorkItem) -> str:
    if item.status:
        return item.status
    if item.agent is not None and item.agent.status == "running":
        return "in_progress"
    if item.blocked_by:
        return "blocked"
    return "open"


def _ready(item: WorkItem) -> str:
    if item.is_ready is not None:
        return _bool_text(item.is_ready)
    return _bool_text(not item.blocked_by)


def _agent(item: WorkItem) -> str | None:
    return item.agent.type if item.agent is not None else None


def _branch(item: WorkItem) -> str | None:
    if item.git is not None and item.git.branch:
        return item.git.branch
    return item.branch


def _pr(item: WorkItem) -> int | None:
    if item.git is not None and item.git.pr_number is not None:
        return item.git.pr_number
    return item.pr


FIELD_RESOLVERS: dict[str, Callable[[WorkItem], Any]] = {
    TEXT_FIELD: _text,
    "status": _status,
    "priority": lambda item: normalize_priority(item.priority),
    "type": lambda item: item.type,
    "labels": lambda item: item.labels,
    "assignee": lambda item: item.assignee,
    "blocked": lambda item: _bool_text(bool(item.blocked_by)),
    "ready": _ready,
    "agent": _agent,
    "branch": _branch,
    "pr": _pr,
}


def _attribute_names() -> dict[str, str]:
    """Lower-cased field names and aliases -> model attribute name."""
    names: dict[str, str] = {}
    for name, info in WorkItem.model_fields.items():
        names[name.lower()] = name
        if info.alias:
            names[info.alias.lower()] = name
    return names


_ATTRIBUTES = _attribute_names()


def _lookup_attribute(item: WorkItem, field: str) -> Any:
    name = _ATTRIBUTES.get(field)
    if name is not None:
        return getattr(item, name)
    for key, value in (item.model_extra or {}).items():
        if key.lower() == field:
            return value
    return None


def resolve_field(item: WorkItem, field: str) -> Any:
    """Map an item and a (lower-cased) field name to a comparable value."""
    resolver = FIELD_RESOLVERS.get(field)
    if resolver is not None:
        return resolver(item)
    return _lookup_attribute(item, field)


# ---------------------------------------------------------------------------
# Comparison
# ---------------------------------------------------------------------------


def _normalize(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return _bool_text(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(_normalize(v) for v in value)
    return str(value).lower()


_NUMBER_RE = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?")


def _to_number(text: str) -> float | None:
    """Plain decimal numbers only; ``inf``, ``nan`` and ``1_0`` are not numbers."""
    if not _NUMBER_RE.fullmatch(text):
        return None
    return float(text)


def _compare_numbers(left: str, right: str, compare: Callable[[float, float], bool]) -> bool:
    a = _to_number(left)
    b = _to_number(right)
    if a is None or b is None:
        return False
    return compare(a, b)


def evaluate_field(node: FieldNode, item: WorkItem) -> bool:
    """Apply a single field comparison to an item."""
    raw = resolve_field(item, node.field)
    actual = _normalize(raw)
    expected = node.value.lower()
    is_sequence = isinstance(raw, (list, tuple, set, frozenset))

    if node.operator == "=":
        if is_sequence:
            return any(_normalize(v) == expected for v in raw)
        if node.field == "assignee" and expected == CURRENT_USER:
            return bool(raw)
        return actual == expected or expected in actual

    if node.operator == "!=":
        if is_sequence:
            return not any(_normalize(v) == expected for v in raw)
        return actual != expected

    if node.operator == ">":
        return _compare_numbers(actual, expected, lambda a, b: a > b)
    if node.operator == "<":
        return _compare_numbers(actual, expected, lambda a, b: a < b)
    if node.operator == ">=":
        return _compare_numbers(actual, expected, lambda a, b: a >= b)
    if node.operator == "<=":
        return _compare_numbers(actual, expected, lambda a, b: a <= b)

    if node.operator == "contains":
        return expected in actual

    if node.operator == "range":
        number = _to_number(actual)
        start = _to_number(expected)
        end = _to_number((node.range_end or node.value).lower())
        if number is None or start is None or end is None:
            return False
        return start <= number <= end

    return False


def evaluate(node: BQLNode, item: WorkItem) -> bool:
    """Evaluate an AST against one item."""
    if isinstance(node, FieldNode):
        return evaluate_field(node, item)
    if isinstance(node, NotNode):
        return not evaluate(node.operand, item)
    left = evaluate(node.left, item)
    right = evaluate(node.right, item)
    if isinstance(node, AndNode):
        return left and right
    if isinstance(node, OrNode):
        return left or right
    return False
