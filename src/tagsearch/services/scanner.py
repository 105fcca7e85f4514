"""File scanner.

Applies one parsed query to every candidate file below a search root::

    ast = parse_query("#python & !#archived")
    scanner = FileScanner(ast, config)
    for result in scanner.search(Path("notes")):
        print(result.path)

Each file is handled independently: its first line is read, its tag set
extracted and the shared, immutable AST evaluated. With
``config.scan.workers > 1`` files are processed on a thread pool; results
still come back in listing order.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path
from typing import Callable, Iterator

from loguru import logger

from ..core.config import Config
from ..core.types import ScanResult
from ..query.ast import Node
from ..query.evaluator import evaluate
from ..sources.filesystem import iter_files, read_first_line
from ..sources.glob_matcher import MultiGlobMatcher, parse_glob_patterns
from ..tags.tagline import extract_tags
from .commands import run_filter_command


class FileScanner:
    """Evaluate a query against the tagline of each candidate file.

    Attributes:
        query: Parsed query shared by all file evaluations. Without a
            query every file with at least one tag matches.
        config: Scan and command settings.
        filter_command: Optional command; a tag match is only kept if
            this command succeeds for the file.
    """

    def __init__(
        self,
        query: Node | None,
        config: Config | None = None,
        filter_command: str | None = None,
    ) -> None:
        self.query = query
        self.config = config or Config()
        self.filter_command = filter_command
        self._matcher = MultiGlobMatcher(parse_glob_patterns(self.config.scan.glob_patterns))

    def scan_file(self, path: Path) -> ScanResult | None:
        """Extract tags from one file and evaluate the query.

        Returns:
            ScanResult, or None if the file cannot be read or decoded.
        """
        try:
            first_line = read_first_line(
                path,
                encoding=self.config.scan.encoding,
                max_length=self.config.scan.max_line_length,
            )
        except UnicodeDecodeError:
            logger.debug(f"Skipping non-text file: {path}")
            return None
        except OSError as e:
            logger.warning(f"Cannot read {path}: {e}")
            return None

        tags = extract_tags(first_line)
        if self.query is None:
            matched = bool(tags)
        else:
            matched = evaluate(self.query, tags)
        logger.debug(f"{path}: tags={sorted(tags)} matched={matched}")
        return ScanResult(path=path, tags=tags, matched=matched)

    def match_file(self, path: Path) -> ScanResult | None:
        """Like scan_file, additionally applying the filter command to matches."""
        result = self.scan_file(path)
        if result is None or not result.matched or not self.filter_command:
            return result

        if run_filter_command(self.filter_command, path, self.config.commands):
            return result
        logger.debug(f"{path}: rejected by filter command")
        return replace(result, matched=False)

    def scan(self, base_path: Path) -> Iterator[ScanResult]:
        """Yield a result for every readable candidate file.

        Raises:
            ScanError: If ``base_path`` is missing or not a directory.
        """
        yield from self._run(base_path, self.scan_file)

    def search(self, base_path: Path) -> Iterator[ScanResult]:
        """Yield results only for files that match (and pass the filter).

        Raises:
            ScanError: If ``base_path`` is missing or not a directory.
            CommandError: If the filter command cannot be run.
        """
        for result in self._run(base_path, self.match_file):
            if result.matched:
                yield result

    def _run(
        self,
        base_path: Path,
        handler: Callable[[Path], ScanResult | None],
    ) -> Iterator[ScanResult]:
        files = iter_files(base_path, self._matcher)
        workers = self.config.scan.workers

        if workers <= 1:
            for result in map(handler, files):
                if result is not None:
                    yield result
            return

        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            for result in executor.map(handler, files):
                if result is not None:
                    yield result
        finally:
            # A consumer that stops early must not wait for queued files
            executor.shutdown(wait=True, cancel_futures=True)
