"""Command implementations for the tag CLI."""

from .search import (
    add_check_arguments,
    add_scan_arguments,
    add_search_arguments,
    handle_check,
    handle_search,
)
from .tags import add_tags_arguments, handle_tags

__all__ = [
    "add_scan_arguments",
    "add_search_arguments",
    "add_check_arguments",
    "add_tags_arguments",
    "handle_search",
    "handle_check",
    "handle_tags",
]
