"""BQL query facade: compile once, filter many.

A filter that failed to compile, or an empty one, matches everything: a bad
query never hides items from a board view.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from beadboard.bql.evaluator import evaluate
from beadboard.bql.ir import BQLNode
from beadboard.bql.parser import parse
from beadboard.models import WorkItem

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT", bound=WorkItem)


@dataclass(frozen=True)
class BQLFilter:
    """A compiled query."""

    query: str
    ast: BQLNode | None
    is_valid: bool
    error: str | None = None

    @property
    def matches_all(self) -> bool:
        return not self.is_valid or self.ast is None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_query, for inline UI feedback."""

    valid: bool
    error: str | None = None


def compile_query(query: str) -> BQLFilter:
    """Compile a BQL query string into a reusable filter."""
    trimmed = query.strip()
    if not trimmed:
        return BQLFilter(query="", ast=None, is_valid=True)

    result = parse(trimmed)
    if result.success:
        return BQLFilter(query=trimmed, ast=result.ast, is_valid=True)

    logger.debug(
        "Invalid BQL query %r: %s (position %s)",
        trimmed, result.error, result.error_position,
    )
    return BQLFilter(query=trimmed, ast=None, is_valid=False, error=result.error)


def filter_items(items: Sequence[ItemT], filt: BQLFilter) -> Sequence[ItemT]:
    """Return the items matching *filt*, in order.

    Invalid or empty filters return *items* itself, untouched.
    """
    if filt.matches_all:
        return items
    ast = filt.ast
    return [item for item in items if evaluate(ast, item)]


def matches_filter(item: WorkItem, filt: BQLFilter) -> bool:
    """Check one item against a compiled filter (fail-open)."""
    if filt.matches_all:
        return True
    return evaluate(filt.ast, item)


def validate_query(query: str) -> ValidationResult:
    """Check a query for syntax errors without keeping the AST."""
    result = parse(query.strip())
    return ValidationResult(valid=result.success, error=result.error)


def column_items(
    items: Sequence[ItemT],
    column_id: str,
    query: str | None = None,
    dynamic: bool = False,
) -> list[ItemT]:
    """Items shown in a board column, sorted by their ``order``.

    A dynamic column with a valid query pulls matching items from the whole
    board; any other column shows the items assigned to it.
    """
    if dynamic and query and query.strip():
        filt = compile_query(query)
        if filt.is_valid and filt.ast is not None:
            return sorted(filter_items(items, filt), key=lambda item: item.order)
    return sorted(
        (item for item in items if item.column_id == column_id),
        key=lambda item: item.order,
    )
