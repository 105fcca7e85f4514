"""Candidate file discovery and first-line reading."""

from .filesystem import iter_files, read_first_line
from .glob_matcher import MultiGlobMatcher, compile_glob, parse_glob_patterns

__all__ = [
    "MultiGlobMatcher",
    "compile_glob",
    "parse_glob_patterns",
    "iter_files",
    "read_first_line",
]
