"""Tag query language: lexer, parser, AST and evaluator.

Example:
    from tagsearch.query import evaluate, parse_query

    ast = parse_query("#python & (#cli | #tui) & !#archived")
    evaluate(ast, {"python", "cli"})   # True
"""

from .ast import And, Node, Not, Or, Tag, referenced_tags, render, walk
from .evaluator import evaluate, matches
from .lexer import Token, TokenType, tokenize
from .parser import QueryParser, parse_query

__all__ = [
    "Node",
    "Tag",
    "Not",
    "And",
    "Or",
    "walk",
    "render",
    "referenced_tags",
    "Token",
    "TokenType",
    "tokenize",
    "QueryParser",
    "parse_query",
    "evaluate",
    "matches",
]
