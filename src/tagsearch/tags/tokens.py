"""Tag token character class.

A tag is written as ``#`` followed by a non-empty tag body. Bodies are
stored without the ``#`` and compared exactly (case-sensitive, no
Unicode normalization). Both the tagline extractor and the query lexer
use the helpers here so the two grammars always agree on what a tag is.

Allowed body characters:
- ASCII letters and digits
- ``_`` and ``-``
- Latin letters U+00C0..U+024F (Latin-1 Supplement, Latin Extended-A/B),
  except the math signs ``×`` (U+00D7) and ``÷`` (U+00F7)
"""

import string

TAG_PREFIX = "#"

_ASCII_TAG_CHARS = frozenset(string.ascii_letters + string.digits + "_-")

_LATIN_START = 0x00C0
_LATIN_END = 0x024F
_LATIN_EXCLUDED = frozenset({"×", "÷"})


def is_tag_char(char: str) -> bool:
    """Check whether a single character may appear in a tag body."""
    if char in _ASCII_TAG_CHARS:
        return True
    return _LATIN_START <= ord(char) <= _LATIN_END and char not in _LATIN_EXCLUDED


def scan_tag_body(text: str, start: int) -> int:
    """Return the end offset of the tag body beginning at ``start``.

    Args:
        text: Text containing the tag.
        start: Offset just after the ``#``.

    Returns:
        Offset of the first character that is not a tag character.
        Equal to ``start`` when no body is present.
    """
    end = start
    while end < len(text) and is_tag_char(text[end]):
        end += 1
    return end


def is_valid_tag(tag: str) -> bool:
    """Check whether ``tag`` is a valid tag body (without ``#``)."""
    return bool(tag) and all(is_tag_char(c) for c in tag)


def format_tag(tag: str) -> str:
    """Render a stored tag body in its source form."""
    return f"{TAG_PREFIX}{tag}"
