"""Multi-glob pattern matching for candidate files.

Patterns use forward slashes relative to the search root. ``*`` and ``?``
never cross a ``/``; a ``**`` segment matches any number of directories.
Patterns prefixed with ``!`` exclude.
"""

from __future__ import annotations

import re

from loguru import logger


def _translate_segment(segment: str) -> str:
    out = []
    i = 0
    while i < len(segment):
        char = segment[i]
        if char == "*":
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
        elif char == "[":
            end = segment.find("]", i + 2)
            if end == -1:
                out.append(re.escape(char))
            else:
                body = segment[i + 1 : end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append(f"[{body}]")
                i = end
        else:
            out.append(re.escape(char))
        i += 1
    return "".join(out)


def compile_glob(pattern: str) -> re.Pattern[str]:
    """Compile a glob pattern to a regex matched against whole relative paths.

    Example:
        >>> bool(compile_glob("**/*.md").fullmatch("notes/todo.md"))
        True
    """
    segments = pattern.strip("/").split("/")
    parts = []
    for index, segment in enumerate(segments):
        last = index == len(segments) - 1
        if segment == "**":
            parts.append(".*" if last else "(?:[^/]+/)*")
        else:
            parts.append(_translate_segment(segment) + ("" if last else "/"))
    return re.compile("".join(parts))


class MultiGlobMatcher:
    """Match relative paths against include and ``!``-exclude patterns.

    A path matches if it matches ANY include pattern and NO exclude
    pattern.

    Example:
        matcher = MultiGlobMatcher(["**/*.md", "**/*.txt", "!**/drafts/**"])
        matcher.matches("docs/readme.md")  # True
        matcher.matches("drafts/wip.md")   # False (excluded)
    """

    def __init__(self, patterns: list[str]) -> None:
        """Initialize with pattern list.

        Raises:
            ValueError: If no include patterns are provided.
        """
        self.includes = [p for p in patterns if not p.startswith("!")]
        self.excludes = [p[1:] for p in patterns if p.startswith("!")]

        if not self.includes:
            raise ValueError(
                "At least one include pattern required (patterns without ! prefix)"
            )

        self._include_res = [compile_glob(p) for p in self.includes]
        self._exclude_res = [compile_glob(p) for p in self.excludes]

        logger.debug(
            f"MultiGlobMatcher initialized: includes={self.includes}, excludes={self.excludes}"
        )

    def matches(self, path: str) -> bool:
        """Check a relative file path (either separator) against the pattern set."""
        normalized = path.replace("\\", "/")
        if not any(r.fullmatch(normalized) for r in self._include_res):
            return False
        return not self.is_excluded(normalized)

    def is_excluded(self, path: str) -> bool:
        return any(r.fullmatch(path) for r in self._exclude_res)

    def prunes_directory(self, rel_dir: str) -> bool:
        """Whether everything below ``rel_dir`` is excluded (e.g. ``**/.git/**``)."""
        return self.is_excluded(rel_dir.replace("\\", "/").rstrip("/") + "/")


def parse_glob_patterns(patterns: list[str] | str | None) -> list[str]:
    """Normalize glob pattern input to a list.

    Returns:
        List of patterns, defaulting to ["**/*"] if None/empty.
    """
    if isinstance(patterns, str):
        return [patterns]
    if not patterns:
        return ["**/*"]
    return list(patterns)
