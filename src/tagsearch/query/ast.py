"""Query abstract syntax tree.

Nodes are frozen dataclasses, so a parsed query can be shared by every
file evaluation (and every worker thread) without copying.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

from ..tags.tokens import format_tag


@dataclass(frozen=True)
class Tag:
    """Leaf: true iff ``name`` is in the tag set."""

    name: str

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class Not:
    """Negation of ``operand``."""

    operand: Node

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class And:
    """Conjunction of ``left`` and ``right``."""

    left: Node
    right: Node

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class Or:
    """Disjunction of ``left`` and ``right``."""

    left: Node
    right: Node

    def __str__(self) -> str:
        return render(self)


Node = Union[Tag, Not, And, Or]

_OPERATOR_SYMBOLS = {And: "&", Or: "|"}


def walk(node: Node) -> Iterator[Node]:
    """Yield every node of the tree in pre-order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        if isinstance(current, Not):
            stack.append(current.operand)
        elif isinstance(current, (And, Or)):
            stack.append(current.right)
            stack.append(current.left)


def referenced_tags(node: Node) -> frozenset[str]:
    """Collect the names of all tags a query refers to."""
    return frozenset(n.name for n in walk(node) if isinstance(n, Tag))


def render(node: Node) -> str:
    """Render a tree back to query syntax.

    Nested binary operations are parenthesized so the output reads the
    same regardless of precedence rules, and parses back to an equal tree.

    Example:
        >>> render(Or(And(Tag("a"), Tag("b")), Not(Tag("c"))))
        '(#a & #b) | !#c'
    """
    rendered: list[str] = []
    stack: list[tuple[Node, bool]] = [(node, False)]

    while stack:
        current, children_done = stack.pop()

        if isinstance(current, Tag):
            rendered.append(format_tag(current.name))
        elif not children_done:
            stack.append((current, True))
            if isinstance(current, Not):
                stack.append((current.operand, False))
            else:
                stack.append((current.right, False))
                stack.append((current.left, False))
        elif isinstance(current, Not):
            operand = rendered.pop()
            if isinstance(current.operand, (And, Or)):
                operand = f"({operand})"
            rendered.append(f"!{operand}")
        else:
            right = rendered.pop()
            left = rendered.pop()
            if isinstance(current.left, (And, Or)):
                left = f"({left})"
            if isinstance(current.right, (And, Or)):
                right = f"({right})"
            rendered.append(f"{left} {_OPERATOR_SYMBOLS[type(current)]} {right}")

    return rendered[0]
