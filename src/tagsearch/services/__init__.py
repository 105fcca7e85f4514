"""Scanning and command services used by the CLI."""

from .commands import (
    FILE_PLACEHOLDER,
    run_command,
    run_filter_command,
    shell_argv,
    substitute_file,
)
from .scanner import FileScanner

__all__ = [
    "FileScanner",
    "FILE_PLACEHOLDER",
    "substitute_file",
    "shell_argv",
    "run_command",
    "run_filter_command",
]
