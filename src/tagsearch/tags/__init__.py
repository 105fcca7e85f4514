"""Tag tokens and tagline extraction."""

from .tagline import TAGLINE_KEYWORD, extract_tags, parse_tagline
from .tokens import TAG_PREFIX, format_tag, is_tag_char, is_valid_tag, scan_tag_body

__all__ = [
    "TAG_PREFIX",
    "TAGLINE_KEYWORD",
    "extract_tags",
    "parse_tagline",
    "format_tag",
    "is_tag_char",
    "is_valid_tag",
    "scan_tag_body",
]
