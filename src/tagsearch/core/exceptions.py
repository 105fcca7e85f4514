"""Custom exceptions for tagsearch."""

from enum import Enum


class TagSearchError(Exception):
    """Base exception for all tagsearch errors."""

    pass


class TaglineFormatError(TagSearchError):
    """First line of a file does not have the tagline shape.

    Raised by the strict tagline parser only. Extraction turns it into
    an empty tag set so a scan never stops because of a single file.
    """

    def __init__(self, line: str, position: int, reason: str):
        """Initialize exception with the offending line.

        Args:
            line: The rejected line.
            position: Character offset where matching failed.
            reason: Short description of what was expected.
        """
        self.line = line
        self.position = position
        self.reason = reason
        super().__init__(f"Not a tagline (column {position + 1}): {reason}")


class ParseErrorKind(Enum):
    """Category of a query parse failure."""

    EMPTY_QUERY = "empty query"
    UNBALANCED_PARENTHESES = "unbalanced parentheses"
    MISSING_OPERAND = "missing operand"
    INVALID_TAG = "invalid tag"
    INVALID_CHARACTER = "invalid character"
    UNEXPECTED_TOKEN = "unexpected token"


class QueryParseError(TagSearchError):
    """Search query is malformed."""

    def __init__(self, kind: ParseErrorKind, query: str, position: int, detail: str):
        """Initialize exception with location information.

        Args:
            kind: Category of the failure.
            query: The full query string.
            position: 0-based character offset of the problem.
            detail: Human readable description.
        """
        self.kind = kind
        self.query = query
        self.position = position
        self.detail = detail
        super().__init__(f"{kind.value} at position {position}: {detail}")

    def pointer(self) -> str:
        """Render the query with a caret under the failing position."""
        # Multi-line queries are shown flattened so the caret lines up
        flat = "".join(" " if c in "\r\n\t" else c for c in self.query)
        return f"  {flat}\n  {' ' * self.position}^"

    def __str__(self) -> str:
        return f"{super().__str__()}\n{self.pointer()}"


class ScanError(TagSearchError):
    """Search root cannot be scanned."""

    pass


class CommandError(TagSearchError):
    """External filter or action command could not be run."""

    def __init__(self, command: str, message: str):
        """Initialize exception with the failing command.

        Args:
            command: Command line after #FILE# substitution.
            message: Description of the failure.
        """
        self.command = command
        super().__init__(f"Wasn't able to execute command {command!r}: {message}")


class ConfigError(TagSearchError):
    """Configuration file could not be loaded."""

    pass
