"""Search commands for the tag CLI.

Provides two commands:
- `tag search`: list files whose tags satisfy a query
- `tag check`: validate a query and show how it was parsed
"""

from pathlib import Path

from loguru import logger

from ...core.config import Config
from ...query import parse_query, referenced_tags
from ...services import FileScanner, run_command
from ...tags import format_tag


def add_scan_arguments(parser) -> None:
    """Add arguments shared by commands that scan a directory.

    Args:
        parser: Argument parser for the command.
    """
    parser.add_argument(
        "-d",
        "--directory",
        default=".",
        help="Directory to search recursively (default: current directory)",
    )
    parser.add_argument(
        "-g",
        "--glob",
        action="append",
        dest="globs",
        metavar="PATTERN",
        help="File glob pattern, repeatable; prefix with ! to exclude (default: **/*)",
    )
    parser.add_argument(
        "-j",
        "--workers",
        type=int,
        help="Number of files processed in parallel",
    )


def apply_scan_arguments(args, config: Config) -> None:
    """Override scan configuration with command line values."""
    if args.globs:
        config.scan.glob_patterns = list(args.globs)
    if args.workers is not None:
        config.scan.workers = args.workers


def add_search_arguments(parser) -> None:
    """Add arguments for the search command.

    Args:
        parser: Argument parser for the command.
    """
    parser.add_argument("query", help="Tag query, e.g. '#a & (#b | !#c)'")
    add_scan_arguments(parser)
    parser.add_argument(
        "-f",
        "--filter",
        metavar="CMD",
        help="Only keep files for which CMD succeeds (#FILE# is replaced by the path)",
    )
    parser.add_argument(
        "-c",
        "--command",
        dest="action",
        metavar="CMD",
        help="Run CMD on every matched file and print its output",
    )
    parser.add_argument(
        "-t",
        "--show-tags",
        action="store_true",
        help="Print the tags of each matched file",
    )


def handle_search(args, config: Config) -> None:
    """Handle search command.

    The query is parsed before any file is touched, so a malformed query
    aborts the run immediately.

    Args:
        args: Parsed command arguments.
        config: Application configuration.
    """
    ast = parse_query(args.query)
    apply_scan_arguments(args, config)

    scanner = FileScanner(ast, config, filter_command=args.filter)
    count = 0
    for result in scanner.search(Path(args.directory)):
        count += 1
        if args.show_tags:
            print(f"{result.path}  {_format_tags(result.tags)}")
        else:
            print(result.path)

        if args.action:
            output = run_command(args.action, result.path, config.commands)
            if output.stdout:
                print(output.stdout, end="" if output.stdout.endswith("\n") else "\n")
            if not output.success:
                logger.warning(
                    f"Command exited with {output.return_code} for {result.path}: "
                    f"{output.stderr.strip()}"
                )

    logger.info(f"{count} matching file(s)")


def add_check_arguments(parser) -> None:
    parser.add_argument("query", help="Tag query to validate")


def handle_check(args, config: Config) -> None:
    """Handle check command: print the canonical form of a query.

    Args:
        args: Parsed command arguments.
        config: Application configuration (unused).
    """
    ast = parse_query(args.query)
    print(f"Query: {ast}")
    print(f"Tags:  {_format_tags(referenced_tags(ast))}")


def _format_tags(tags) -> str:
    return " ".join(format_tag(t) for t in sorted(tags))
