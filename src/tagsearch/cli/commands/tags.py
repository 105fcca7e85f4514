"""Tags command for the tag CLI: list what is tagged where."""

from collections import Counter
from pathlib import Path

from ...core.config import Config
from ...services import FileScanner
from ...tags import format_tag
from .search import add_scan_arguments, apply_scan_arguments


def add_tags_arguments(parser) -> None:
    """Add arguments for the tags command.

    Args:
        parser: Argument parser for the command.
    """
    add_scan_arguments(parser)
    parser.add_argument(
        "-u",
        "--unique",
        action="store_true",
        help="List each distinct tag with the number of files carrying it",
    )


def handle_tags(args, config: Config) -> None:
    """Handle tags command.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    apply_scan_arguments(args, config)
    scanner = FileScanner(None, config)
    tagged = [r for r in scanner.scan(Path(args.directory)) if r.is_tagged]

    if args.unique:
        _print_tag_counts(tagged)
        return

    for result in tagged:
        tags = " ".join(format_tag(t) for t in sorted(result.tags))
        print(f"{result.path}: {tags}")


def _print_tag_counts(results) -> None:
    counts = Counter(tag for result in results for tag in result.tags)
    if not counts:
        print("No tagged files found.")
        return

    width = max(len(format_tag(tag)) for tag in counts)
    for tag, count in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        print(f"{format_tag(tag):<{width}}  {count}")
