"""BQL tokenizer: splits a query string into field and operator tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

TEXT_FIELD = "_text"


class TokenType(str, Enum):
    FIELD = "FIELD"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    LPAREN = "LPAREN"
    RPAREN = "RPAREN"
    EOF = "EOF"


_KEYWORDS = {
    "AND": TokenType.AND,
    "OR": TokenType.OR,
    "NOT": TokenType.NOT,
}

_PARENS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


@dataclass(frozen=True)
class Token:
    """A single BQL token with its offset in the (stripped) query."""

    type: TokenType
    value: str
    position: int
    field: str | None = None  # FIELD only
    field_value: str | None = None  # FIELD only


def split_word(word: str) -> tuple[str, str]:
    """Split a bare word into (field, value).

    ``status:open`` -> ("status", "open"); a word without a colon is a
    full-text search term on ``_text``.
    """
    if ":" in word:
        field, _, value = word.partition(":")
        return field.lower(), value
    return TEXT_FIELD, word


def tokenize(query: str) -> list[Token]:
    """Tokenize a BQL query. Never raises; always ends with an EOF token."""
    text = query.strip()
    tokens: list[Token] = []
    pos = 0
    length = len(text)

    while pos < length:
        char = text[pos]
        if char.isspace():
            pos += 1
            continue

        if char in _PARENS:
            tokens.append(Token(_PARENS[char], char, pos))
            pos += 1
            continue

        start = pos
        while pos < length and not text[pos].isspace() and text[pos] not in _PARENS:
            pos += 1
        word = text[start:pos]

        keyword = _KEYWORDS.get(word.upper())
        if keyword is not None:
            tokens.append(Token(keyword, keyword.value, start))
            continue

        field, value = split_word(word)
        tokens.append(
            Token(TokenType.FIELD, word, start, field=field, field_value=value)
        )

    tokens.append(Token(TokenType.EOF, "", length))
    return tokens
