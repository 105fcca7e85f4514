"""Tests for FileScanner."""

import os
import threading
import time

import pytest
from pathlib import Path

from tagsearch.core.config import CommandConfig, Config
from tagsearch.core.exceptions import ScanError
from tagsearch.query import parse_query
from tagsearch.services import FileScanner


def _names(results, base: Path) -> list[str]:
    return [r.path.relative_to(base).as_posix() for r in results]


class TestScan:
    """Tests for FileScanner.scan."""

    def test_reports_every_readable_file(self, tagged_tree: Path, config: Config):
        scanner = FileScanner(parse_query("#a"), config)

        results = {
            r.path.relative_to(tagged_tree).as_posix(): r for r in scanner.scan(tagged_tree)
        }

        # binary.bin cannot be decoded, .git is excluded
        assert set(results) == {"a.md", "b.txt", "empty.md", "sub/c.md", "sub/late.md"}
        assert results["a.md"].tags == {"a", "b"}
        assert results["a.md"].matched is True
        assert results["b.txt"].matched is False

    def test_second_line_tagline_ignored(self, tagged_tree: Path, config: Config):
        scanner = FileScanner(parse_query("#a"), config)

        late = next(r for r in scanner.scan(tagged_tree) if r.path.name == "late.md")

        assert late.tags == frozenset()
        assert late.matched is False
        assert late.is_tagged is False

    def test_without_query_matches_tagged_files(self, tagged_tree: Path, config: Config):
        scanner = FileScanner(None, config)

        matched = [r for r in scanner.scan(tagged_tree) if r.matched]

        assert _names(matched, tagged_tree) == ["a.md", "b.txt", "sub/c.md"]

    def test_missing_root_raises(self, tmp_path: Path, config: Config):
        scanner = FileScanner(parse_query("#a"), config)

        with pytest.raises(ScanError):
            list(scanner.scan(tmp_path / "missing"))


class TestSearch:
    """Tests for FileScanner.search."""

    def test_only_matches_are_returned(self, tagged_tree: Path, config: Config):
        scanner = FileScanner(parse_query("#b | #c"), config)

        assert _names(scanner.search(tagged_tree), tagged_tree) == ["a.md", "b.txt", "sub/c.md"]

    def test_negation_matches_untagged_files(self, tagged_tree: Path, config: Config):
        scanner = FileScanner(parse_query("!#b"), config)

        assert _names(scanner.search(tagged_tree), tagged_tree) == [
            "empty.md",
            "sub/c.md",
            "sub/late.md",
        ]

    def test_glob_patterns_limit_candidates(self, tagged_tree: Path, config: Config):
        config.scan.glob_patterns = ["**/*.md"]
        scanner = FileScanner(parse_query("#b"), config)

        assert _names(scanner.search(tagged_tree), tagged_tree) == ["a.md"]

    def test_parallel_workers_keep_order(self, tagged_tree: Path, config: Config):
        sequential = FileScanner(parse_query("#a | #c"), config)
        expected = _names(sequential.search(tagged_tree), tagged_tree)

        config.scan.workers = 4
        parallel = FileScanner(parse_query("#a | #c"), config)

        assert _names(parallel.search(tagged_tree), tagged_tree) == expected

    def test_overlong_first_line_has_no_tags(self, tmp_path: Path, config: Config):
        (tmp_path / "long.md").write_text("tags: [#a] garbage after bracket\n")
        config.scan.max_line_length = 10
        scanner = FileScanner(parse_query("#a"), config)

        assert list(scanner.search(tmp_path)) == []
        assert [r.tags for r in scanner.scan(tmp_path)] == [frozenset()]

    def test_closing_parallel_search_cancels_queued_files(
        self, tmp_path: Path, config: Config, monkeypatch
    ):
        for i in range(40):
            (tmp_path / f"{i:02d}.md").write_text("tags: [#a]\n")
        config.scan.workers = 2
        scanner = FileScanner(parse_query("#a"), config)

        handled = []
        lock = threading.Lock()
        original = FileScanner.match_file

        def slow_match(self, path):
            with lock:
                handled.append(path)
            time.sleep(0.05)
            return original(self, path)

        monkeypatch.setattr(FileScanner, "match_file", slow_match)

        results = scanner.search(tmp_path)
        next(results)
        results.close()

        assert len(handled) < 40

    def test_search_order_does_not_change_decisions(self, tagged_tree: Path, config: Config):
        """Each file's result depends only on its own tagline."""
        scanner = FileScanner(parse_query("#c & !#b"), config)

        first = [(r.path, r.matched) for r in scanner.scan(tagged_tree)]
        second = [(r.path, r.matched) for r in scanner.scan(tagged_tree)]

        assert first == second

    @pytest.mark.skipif(os.name == "nt", reason="uses POSIX shell commands")
    def test_filter_command(self, tagged_tree: Path, config: Config):
        config.commands = CommandConfig(shell="sh", timeout=30.0)
        scanner = FileScanner(
            parse_query("#a | #b"),
            config,
            filter_command="grep -q Body #FILE#",
        )

        assert _names(scanner.search(tagged_tree), tagged_tree) == ["a.md"]
