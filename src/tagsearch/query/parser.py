"""Parser for the tag query language.

Grammar, loosest binding first::

    query   = or
    or      = and ("|" and)*
    and     = unary ("&" unary)*
    unary   = "!" unary | primary
    primary = "#" tag-body | "(" query ")"

``&`` and ``|`` are left-associative. The parser is an operator-precedence
(shunting-yard) parser driven by an explicit operator stack, so the nesting
depth of parentheses and negations is not limited by the recursion limit.
"""

from __future__ import annotations

from loguru import logger

from ..core.exceptions import ParseErrorKind, QueryParseError
from .ast import And, Node, Not, Or, Tag
from .lexer import Token, TokenType, tokenize

_PRECEDENCE = {
    TokenType.OR: 1,
    TokenType.AND: 2,
    TokenType.NOT: 3,
}

_BINARY = (TokenType.AND, TokenType.OR)


class QueryParser:
    """Builds a query AST from a query string in a single pass.

    Example:
        >>> QueryParser("#a & !#b").parse()
        And(left=Tag(name='a'), right=Not(operand=Tag(name='b')))
    """

    def __init__(self, query: str) -> None:
        self.query = query
        self._operands: list[Node] = []
        self._operators: list[Token] = []

    def parse(self) -> Node:
        """Parse the query.

        Returns:
            Root node of the query AST.

        Raises:
            QueryParseError: If the query is malformed.
        """
        self._operands = []
        self._operators = []
        expect_operand = True
        previous: Token | None = None

        for token in tokenize(self.query):
            if expect_operand:
                if token.type is TokenType.TAG:
                    self._operands.append(Tag(token.value))
                    expect_operand = False
                elif token.type in (TokenType.NOT, TokenType.LPAREN):
                    self._operators.append(token)
                else:
                    self._reject_missing_operand(token, previous)
            elif token.type in _BINARY:
                self._reduce(_PRECEDENCE[token.type])
                self._operators.append(token)
                expect_operand = True
            elif token.type is TokenType.RPAREN:
                self._close_group(token)
            else:
                raise self._error(
                    ParseErrorKind.UNEXPECTED_TOKEN,
                    token.position,
                    f"expected '&', '|' or ')' before {_describe(token)}",
                )
            previous = token

        if previous is None:
            raise self._error(ParseErrorKind.EMPTY_QUERY, 0, "query is empty")

        if expect_operand:
            if previous.type is TokenType.LPAREN:
                raise self._error(
                    ParseErrorKind.UNBALANCED_PARENTHESES, previous.position, "missing ')'"
                )
            raise self._error(
                ParseErrorKind.MISSING_OPERAND,
                previous.position,
                f"operator {previous.value!r} is missing an operand",
            )

        self._reduce(0)
        if self._operators:
            raise self._error(
                ParseErrorKind.UNBALANCED_PARENTHESES,
                self._operators[-1].position,
                "missing ')'",
            )

        ast = self._operands.pop()
        logger.debug(f"Parsed query {self.query!r} as {ast}")
        return ast

    def _reduce(self, min_precedence: int) -> None:
        """Apply stacked operators binding at least as tight as ``min_precedence``."""
        while self._operators:
            top = self._operators[-1]
            if top.type is TokenType.LPAREN or _PRECEDENCE[top.type] < min_precedence:
                return
            self._operators.pop()
            self._apply(top)

    def _apply(self, operator: Token) -> None:
        if operator.type is TokenType.NOT:
            self._operands.append(Not(self._operands.pop()))
            return

        right = self._operands.pop()
        left = self._operands.pop()
        if operator.type is TokenType.AND:
            self._operands.append(And(left, right))
        else:
            self._operands.append(Or(left, right))

    def _close_group(self, token: Token) -> None:
        self._reduce(0)
        if not self._operators:
            raise self._error(
                ParseErrorKind.UNBALANCED_PARENTHESES, token.position, "unmatched ')'"
            )
        self._operators.pop()

    def _reject_missing_operand(self, token: Token, previous: Token | None) -> None:
        if token.type is TokenType.RPAREN:
            if not any(op.type is TokenType.LPAREN for op in self._operators):
                raise self._error(
                    ParseErrorKind.UNBALANCED_PARENTHESES, token.position, "unmatched ')'"
                )
            if previous is not None and previous.type is TokenType.LPAREN:
                raise self._error(
                    ParseErrorKind.UNEXPECTED_TOKEN, token.position, "empty parentheses"
                )

        if previous is None:
            detail = f"query cannot start with {_describe(token)}"
        else:
            detail = f"expected a tag, '!' or '(' after {_describe(previous)}"
        raise self._error(ParseErrorKind.MISSING_OPERAND, token.position, detail)

    def _error(self, kind: ParseErrorKind, position: int, detail: str) -> QueryParseError:
        return QueryParseError(kind, self.query, position, detail)


def _describe(token: Token) -> str:
    if token.type is TokenType.TAG:
        return f"tag '#{token.value}'"
    return f"{token.value!r}"


def parse_query(query: str) -> Node:
    """Parse a query string into an immutable AST.

    Args:
        query: Boolean expression over tags, e.g. ``"#a & (#b | !#c)"``.

    Returns:
        Root node of the query AST.

    Raises:
        QueryParseError: If the query is malformed.
    """
    return QueryParser(query).parse()
