"""tagsearch - find plain-text files by the tags on their first line.

A tagged file starts with a tagline::

    tags: [#python #parser]

and is found with a boolean query over tags::

    from tagsearch import evaluate, extract_tags, parse_query

    ast = parse_query("#python & !#archived")
    evaluate(ast, extract_tags("tags: [#python #parser]"))  # True
"""

__version__ = "0.1.0"

from .core.exceptions import ParseErrorKind, QueryParseError, TaglineFormatError
from .query import evaluate, parse_query
from .tags import extract_tags

__all__ = [
    "__version__",
    "extract_tags",
    "parse_query",
    "evaluate",
    "QueryParseError",
    "ParseErrorKind",
    "TaglineFormatError",
]
