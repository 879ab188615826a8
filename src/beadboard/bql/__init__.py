"""BQL, the beads query language for filtering tasks and issues.

Field filters (``status:open``, ``priority:1-2``, ``labels:bug``,
``assignee:@me``), bare words for full-text search, ``AND``/``OR``/``NOT``
and parentheses.
"""

from beadboard.bql.evaluator import FIELD_RESOLVERS, evaluate, resolve_field
from beadboard.bql.ir import (
    AndNode,
    BQLNode,
    FieldNode,
    NotNode,
    OrNode,
    ParseResult,
)
from beadboard.bql.parser import BQLSyntaxError, parse
from beadboard.bql.presets import BQL_COLUMN_PRESETS, ColumnPreset, get_preset_filter
from beadboard.bql.query import (
    BQLFilter,
    ValidationResult,
    column_items,
    compile_query,
    filter_items,
    matches_filter,
    validate_query,
)
from beadboard.bql.tokens import Token, TokenType, tokenize

__all__ = [
    "AndNode",
    "BQLFilter",
    "BQLNode",
    "BQLSyntaxError",
    "BQL_COLUMN_PRESETS",
    "ColumnPreset",
    "FIELD_RESOLVERS",
    "FieldNode",
    "NotNode",
    "OrNode",
    "ParseResult",
    "Token",
    "TokenType",
    "ValidationResult",
    "column_items",
    "compile_query",
    "evaluate",
    "filter_items",
    "get_preset_filter",
    "matches_filter",
    "parse",
    "resolve_field",
    "tokenize",
    "validate_query",
]
