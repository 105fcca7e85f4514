"""Core configuration, errors and shared types for tagsearch."""

from .config import CommandConfig, Config, ScanConfig
from .exceptions import (
    CommandError,
    ConfigError,
    ParseErrorKind,
    QueryParseError,
    ScanError,
    TagSearchError,
    TaglineFormatError,
)
from .types import EMPTY_TAGS, CommandResult, ScanResult, TagSet

__all__ = [
    "Config",
    "ScanConfig",
    "CommandConfig",
    "TagSearchError",
    "TaglineFormatError",
    "ParseErrorKind",
    "QueryParseError",
    "ScanError",
    "CommandError",
    "ConfigError",
    "TagSet",
    "EMPTY_TAGS",
    "ScanResult",
    "CommandResult",
]
