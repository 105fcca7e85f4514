"""Tagline parsing.

The tagline is the first line of a tagged file::

    tags: [#python #parser #todo]

Grammar::

    tagline  = "tags:" ws* "[" (ws* tag ws*)* "]" ws* [newline]
    tag      = "#" tag-body
    ws       = " " | "\\t"
    newline  = "\\n" | "\\r\\n"

Tags may follow each other without whitespace (``tags:[#a#b]``). Anything
that does not match, including a declaration that continues past the
first line, yields no tags.
"""

from loguru import logger

from ..core.exceptions import TaglineFormatError
from ..core.types import EMPTY_TAGS, TagSet
from .tokens import TAG_PREFIX, scan_tag_body

TAGLINE_KEYWORD = "tags:"

_WHITESPACE = " \t"


def _skip_whitespace(line: str, pos: int) -> int:
    while pos < len(line) and line[pos] in _WHITESPACE:
        pos += 1
    return pos


def _strip_line_ending(tail: str) -> str:
    if tail.endswith("\r\n"):
        return tail[:-2]
    if tail.endswith("\n"):
        return tail[:-1]
    return tail


def parse_tagline(line: str) -> list[str]:
    """Parse a tagline strictly.

    Args:
        line: First line of a file, optionally with its line ending.

    Returns:
        Tag bodies (without ``#``) in order of first appearance,
        duplicates removed.

    Raises:
        TaglineFormatError: If the line does not have the tagline shape.

    Example:
        >>> parse_tagline("tags: [#x #y #x]")
        ['x', 'y']
    """
    if not line.startswith(TAGLINE_KEYWORD):
        raise TaglineFormatError(line, 0, f"expected {TAGLINE_KEYWORD!r}")

    pos = _skip_whitespace(line, len(TAGLINE_KEYWORD))
    if pos >= len(line) or line[pos] != "[":
        raise TaglineFormatError(line, pos, "expected '['")
    pos += 1

    tags: dict[str, None] = {}
    while True:
        pos = _skip_whitespace(line, pos)
        if pos >= len(line):
            raise TaglineFormatError(line, pos, "missing closing ']'")

        char = line[pos]
        if char == "]":
            pos += 1
            break
        if char == TAG_PREFIX:
            end = scan_tag_body(line, pos + 1)
            if end == pos + 1:
                raise TaglineFormatError(line, pos + 1, "expected tag name after '#'")
            tags[line[pos + 1 : end]] = None
            pos = end
            continue
        if char in "\r\n":
            raise TaglineFormatError(line, pos, "tagline must fit on a single line")
        raise TaglineFormatError(line, pos, f"unexpected character {char!r}")

    tail = _strip_line_ending(line[pos:])
    trailing = tail.lstrip(_WHITESPACE)
    if trailing:
        raise TaglineFormatError(
            line, pos + len(tail) - len(trailing), "unexpected text after ']'"
        )

    return list(tags)


def extract_tags(first_line: str) -> TagSet:
    """Extract the tag set declared by a file's first line.

    Lines without a valid tagline yield an empty set; this is a normal
    per-file outcome, not an error.

    Args:
        first_line: The first line of a file.

    Returns:
        Frozen set of tag bodies (without ``#``).
    """
    try:
        return frozenset(parse_tagline(first_line))
    except TaglineFormatError as e:
        logger.debug(f"No tags: {e}")
        return EMPTY_TAGS
