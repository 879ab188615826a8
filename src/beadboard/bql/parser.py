"""BQL parser: converts BQL token streams into immutable AST nodes."""

from __future__ import annotations

import re

from lark import Lark, Transformer, v_args, exceptions as lark_exceptions
from lark.lexer import Lexer, Token as LarkToken

from beadboard.bql.ir import (
    AndNode,
    BQLNode,
    FieldNode,
    NotNode,
    OrNode,
    ParseResult,
)
from beadboard.bql.tokens import TEXT_FIELD, Token, TokenType, tokenize

# ---------------------------------------------------------------------------
# Lark grammar
# ---------------------------------------------------------------------------

# Precedence, low to high: OR, AND, NOT, primary. Left-recursive rules keep
# AND/OR left-associative.
_GRAMMAR = r"""
    start: expression

    ?expression: term
               | expression _OR term -> or_expr
    ?term: factor
         | term _AND factor -> and_expr
    ?factor: _NOT factor -> not_expr
           | primary
    ?primary: FIELD -> field_expr
            | _LPAREN expression _RPAREN

    %declare FIELD _AND _OR _NOT _LPAREN _RPAREN
"""

# BQL token type -> lark terminal name
_TERMINALS = {
    TokenType.FIELD: "FIELD",
    TokenType.AND: "_AND",
    TokenType.OR: "_OR",
    TokenType.NOT: "_NOT",
    TokenType.LPAREN: "_LPAREN",
    TokenType.RPAREN: "_RPAREN",
}


class _BQLLexer(Lexer):
    """Feeds pre-tokenized BQL tokens to lark; each lark token wraps a BQL Token."""

    def __init__(self, lexer_conf):
        pass

    def lex(self, data):
        for token in data:
            if token.type is TokenType.EOF:
                break
            yield LarkToken(_TERMINALS[token.type], token, start_pos=token.position)


_parser = Lark(_GRAMMAR, parser="lalr", lexer=_BQLLexer)

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class BQLSyntaxError(Exception):
    """Raised internally when a BQL token stream cannot be parsed."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.message = message
        self.position = position


# ---------------------------------------------------------------------------
# Field value operators
# ---------------------------------------------------------------------------

# Checked in order; the first matching prefix wins.
_PREFIX_OPERATORS = (
    ("!", "!="),
    (">=", ">="),
    ("<=", "<="),
    (">", ">"),
    ("<", "<"),
)

_RANGE_RE = re.compile(r"[0-9]+-[0-9]+")


def parse_field_value(field: str, value: str) -> FieldNode:
    """Build a FieldNode, peeling an embedded operator off the value."""
    for prefix, operator in _PREFIX_OPERATORS:
        if value.startswith(prefix):
            return FieldNode(field=field, value=value[len(prefix):], operator=operator)
    if _RANGE_RE.fullmatch(value):
        start, _, end = value.partition("-")
        return FieldNode(field=field, value=start, operator="range", range_end=end)
    if value.startswith("*") or value.endswith("*"):
        return FieldNode(field=field, value=value.replace("*", ""), operator="contains")
    return FieldNode(field=field, value=value)


# ---------------------------------------------------------------------------
# Tree transformer → AST
# ---------------------------------------------------------------------------


@v_args(inline=True)
class _BQLTransformer(Transformer):
    """Transform the lark parse tree into BQL AST nodes."""

    def field_expr(self, token):
        bql_token: Token = token.value
        return parse_field_value(
            bql_token.field or TEXT_FIELD, bql_token.field_value or ""
        )

    def not_expr(self, operand):
        return NotNode(operand=operand)

    def and_expr(self, left, right):
        return AndNode(left=left, right=right)

    def or_expr(self, left, right):
        return OrNode(left=left, right=right)

    def start(self, expr):
        return expr


_transformer = _BQLTransformer()


def _open_parens(tokens: list[Token], position: int) -> int:
    """Parenthesis nesting depth just before *position*."""
    depth = 0
    for token in tokens:
        if token.position >= position:
            break
        if token.type is TokenType.LPAREN:
            depth += 1
        elif token.type is TokenType.RPAREN:
            depth -= 1
    return depth


def _syntax_error(
    error: lark_exceptions.UnexpectedToken, tokens: list[Token], eof_position: int
) -> BQLSyntaxError:
    token = error.token
    if token.type == "$END":
        position = eof_position
        shown = "end of input"
    else:
        position = token.start_pos
        shown = token.value.value
    # _RPAREN shows up in merged LALR lookaheads even at top level.
    if "_RPAREN" in error.expected and _open_parens(tokens, position) > 0:
        return BQLSyntaxError("Expected closing parenthesis", position)
    return BQLSyntaxError(f"Unexpected token: {shown}", position)


def parse_tokens(tokens: list[Token]) -> BQLNode | None:
    """Parse a token list into an AST.

    Returns None for an empty stream. Raises BQLSyntaxError on bad input.
    """
    eof_position = tokens[-1].position if tokens else 0
    if all(token.type is TokenType.EOF for token in tokens):
        return None
    try:
        tree = _parser.parse(tokens)
    except lark_exceptions.UnexpectedToken as e:
        raise _syntax_error(e, tokens, eof_position) from e
    except lark_exceptions.UnexpectedInput as e:
        position = e.pos_in_stream if e.pos_in_stream is not None else eof_position
        raise BQLSyntaxError("Parse error", position) from e
    return _transformer.transform(tree)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse(query: str) -> ParseResult:
    """Parse a BQL query string.

    Never raises: syntax errors come back as a failed ParseResult carrying
    the message and the offending position.

    Examples:
        >>> parse("status:open AND priority:1-2").success
        True

        >>> parse("(status:open").error
        'Expected closing parenthesis'
    """
    try:
        ast = parse_tokens(tokenize(query))
    except BQLSyntaxError as e:
        return ParseResult(success=False, error=e.message, error_position=e.position)
    return ParseResult(success=True, ast=ast)
