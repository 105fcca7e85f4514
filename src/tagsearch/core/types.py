"""Type definitions for tagsearch."""

from dataclasses import dataclass
from pathlib import Path

# Tags are stored without their leading "#"
TagSet = frozenset[str]

EMPTY_TAGS: TagSet = frozenset()


@dataclass(frozen=True)
class ScanResult:
    """Outcome of evaluating the query against one file."""

    path: Path
    tags: TagSet
    matched: bool

    @property
    def is_tagged(self) -> bool:
        """Whether the file carries a valid, non-empty tagline."""
        return bool(self.tags)


@dataclass
class CommandResult:
    """Result of running a filter or action command on a file."""

    command: str
    return_code: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.return_code == 0
