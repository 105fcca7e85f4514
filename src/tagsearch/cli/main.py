"""CLI entry point for tagsearch."""

import argparse
import sys
from typing import NoReturn

from loguru import logger

from .. import __version__
from ..core.config import Config
from ..core.exceptions import QueryParseError
from . import commands

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_QUERY = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="tag",
        description="Find plain-text files by the tags declared on their first line",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="TOML configuration file (default: $TAGSEARCH_CONFIG)",
    )

    subparsers = parser.add_subparsers(dest="command", required=False)

    search_parser = subparsers.add_parser("search", help="List files matching a tag query")
    commands.add_search_arguments(search_parser)

    tags_parser = subparsers.add_parser("tags", help="List tagged files and their tags")
    commands.add_tags_arguments(tags_parser)

    check_parser = subparsers.add_parser("check", help="Validate a tag query")
    commands.add_check_arguments(check_parser)

    return parser


def configure_logging(level: str) -> None:
    """Send loguru output to stderr at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level, format="<level>{level: <8}</level> {message}")


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = Config.from_env_or_file(args.config)
        configure_logging("DEBUG" if args.verbose else config.log_level)

        if args.command == "search":
            commands.handle_search(args, config)
        elif args.command == "tags":
            commands.handle_tags(args, config)
        elif args.command == "check":
            commands.handle_check(args, config)
        else:
            parser.print_help()

        sys.exit(EXIT_OK)
    except QueryParseError as e:
        print(f"Error: invalid query: {e}", file=sys.stderr)
        sys.exit(EXIT_INVALID_QUERY)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
