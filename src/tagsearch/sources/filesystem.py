"""Filesystem access for the scanner.

Enumerates candidate files below a search root and reads the first line
of each file. Nothing past the first line is ever read.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from loguru import logger

from ..core.exceptions import ScanError
from .glob_matcher import MultiGlobMatcher


def iter_files(base_path: Path, matcher: MultiGlobMatcher) -> Iterator[Path]:
    """Recursively list files under ``base_path`` accepted by ``matcher``.

    Directories and files are visited in sorted order so repeated runs list
    files identically. Excluded directories are not descended into.

    Args:
        base_path: Root directory to search.
        matcher: Include/exclude pattern set, applied to paths relative
            to ``base_path``.

    Yields:
        Paths of matching regular files.

    Raises:
        ScanError: If ``base_path`` does not exist or is not a directory.
    """
    if not base_path.exists():
        raise ScanError(f"Search path does not exist: {base_path}")
    if not base_path.is_dir():
        raise ScanError(f"Search path is not a directory: {base_path}")

    def _on_error(error: OSError) -> None:
        logger.warning(f"Cannot list directory {error.filename}: {error.strerror}")

    for dirpath, dirnames, filenames in os.walk(base_path, onerror=_on_error):
        current = Path(dirpath)
        rel_dir = current.relative_to(base_path).as_posix()
        prefix = "" if rel_dir == "." else f"{rel_dir}/"

        kept = []
        for name in sorted(dirnames):
            if matcher.prunes_directory(prefix + name):
                logger.debug(f"Skipping excluded directory: {prefix}{name}")
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in sorted(filenames):
            if matcher.matches(prefix + name):
                path = current / name
                if path.is_file():
                    yield path


def read_first_line(path: Path, encoding: str = "utf-8-sig", max_length: int = 4096) -> str:
    """Read the first line of a text file, including its line ending.

    Only the first line is decoded, so undecodable bytes further down the
    file do not matter. A first line longer than ``max_length`` bytes is
    never a tagline; it is returned as an empty string rather than as a
    truncated prefix.

    Args:
        path: File to read.
        encoding: Text encoding.
        max_length: Maximum number of bytes in the first line.

    Returns:
        The first line, or an empty string for an empty file or an
        overlong first line.

    Raises:
        OSError: If the file cannot be opened or read.
        UnicodeDecodeError: If the first line is not valid in ``encoding``.
    """
    with path.open("rb") as f:
        raw = f.readline(max_length)
        if len(raw) == max_length and not raw.endswith(b"\n") and f.read(1):
            logger.debug(f"First line of {path} exceeds {max_length} bytes")
            return ""

    return raw.decode(encoding)
