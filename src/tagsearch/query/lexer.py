"""Tokenizer for the tag query language."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from ..core.exceptions import ParseErrorKind, QueryParseError
from ..tags.tokens import TAG_PREFIX, scan_tag_body


class TokenType(Enum):
    """Kinds of query tokens."""

    TAG = "tag"
    AND = "&"
    OR = "|"
    NOT = "!"
    LPAREN = "("
    RPAREN = ")"


@dataclass(frozen=True)
class Token:
    """A lexed token.

    Attributes:
        type: Token kind.
        position: Offset of the token's first character in the query.
        value: Tag body for TAG tokens, the operator symbol otherwise.
    """

    type: TokenType
    position: int
    value: str


_SYMBOLS = {
    "&": TokenType.AND,
    "|": TokenType.OR,
    "!": TokenType.NOT,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

# Characters that may directly follow a tag body
_TAG_TERMINATORS = frozenset(_SYMBOLS) | {TAG_PREFIX}


def tokenize(query: str) -> Iterator[Token]:
    """Split a query string into tokens.

    Whitespace (including newlines) between tokens is skipped.

    Raises:
        QueryParseError: On a ``#`` without tag body, an invalid character
            glued to a tag, or a character that starts no token.
    """
    pos = 0
    length = len(query)

    while pos < length:
        char = query[pos]

        if char.isspace():
            pos += 1
            continue

        if char in _SYMBOLS:
            yield Token(_SYMBOLS[char], pos, char)
            pos += 1
            continue

        if char == TAG_PREFIX:
            end = scan_tag_body(query, pos + 1)
            if end == pos + 1:
                raise QueryParseError(
                    ParseErrorKind.INVALID_TAG,
                    query,
                    pos + 1,
                    "expected tag name after '#'",
                )
            if end < length and not query[end].isspace() and query[end] not in _TAG_TERMINATORS:
                raise QueryParseError(
                    ParseErrorKind.INVALID_TAG,
                    query,
                    end,
                    f"invalid character {query[end]!r} in tag {query[pos:end]!r}",
                )
            yield Token(TokenType.TAG, pos, query[pos + 1 : end])
            pos = end
            continue

        raise QueryParseError(
            ParseErrorKind.INVALID_CHARACTER,
            query,
            pos,
            f"unexpected character {char!r}",
        )
