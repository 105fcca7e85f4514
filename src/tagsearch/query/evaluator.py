"""Evaluate a query AST against a file's tag set."""

from __future__ import annotations

from typing import AbstractSet

from .ast import And, Node, Not, Tag
from .parser import parse_query


def evaluate(ast: Node, tags: AbstractSet[str]) -> bool:
    """Decide whether a tag set satisfies a query.

    ``&`` and ``|`` short-circuit. The walk uses an explicit stack, so any
    well-formed tree evaluates without recursion limits and without errors;
    tags missing from ``tags`` simply evaluate to false.

    Args:
        ast: Parsed query.
        tags: Tag bodies of one file (without ``#``).

    Returns:
        True if the file matches the query.
    """
    values: list[bool] = []
    # (node, stage): stage 0 = not visited, 1 = first child evaluated
    stack: list[tuple[Node, int]] = [(ast, 0)]

    while stack:
        node, stage = stack.pop()

        if isinstance(node, Tag):
            values.append(node.name in tags)
        elif isinstance(node, Not):
            if stage == 0:
                stack.append((node, 1))
                stack.append((node.operand, 0))
            else:
                values.append(not values.pop())
        elif stage == 0:
            stack.append((node, 1))
            stack.append((node.left, 0))
        else:
            left = values[-1]
            decided = not left if isinstance(node, And) else left
            if not decided:
                # The right operand's value becomes the result
                values.pop()
                stack.append((node.right, 0))

    return values.pop()


def matches(query: str, tags: AbstractSet[str]) -> bool:
    """Parse ``query`` and evaluate it against ``tags``.

    Raises:
        QueryParseError: If the query is malformed.
    """
    return evaluate(parse_query(query), tags)
