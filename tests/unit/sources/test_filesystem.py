"""Tests for filesystem listing and first-line reading."""

import pytest
from pathlib import Path

from tagsearch.core.exceptions import ScanError
from tagsearch.sources import MultiGlobMatcher, iter_files, read_first_line


def _rel(paths, base: Path) -> list[str]:
    return [p.relative_to(base).as_posix() for p in paths]


class TestIterFiles:
    """Tests for iter_files."""

    def test_lists_recursively_in_sorted_order(self, tagged_tree: Path):
        matcher = MultiGlobMatcher(["**/*", "!**/.git/**"])

        files = _rel(iter_files(tagged_tree, matcher), tagged_tree)

        assert files == [
            "a.md",
            "b.txt",
            "binary.bin",
            "empty.md",
            "sub/c.md",
            "sub/late.md",
        ]

    def test_include_pattern(self, tagged_tree: Path):
        matcher = MultiGlobMatcher(["**/*.md"])

        files = _rel(iter_files(tagged_tree, matcher), tagged_tree)

        assert "b.txt" not in files
        assert "sub/c.md" in files

    def test_excluded_directory_not_listed(self, tagged_tree: Path):
        matcher = MultiGlobMatcher(["**/*", "!**/sub/**"])

        files = _rel(iter_files(tagged_tree, matcher), tagged_tree)

        assert not any(f.startswith("sub/") for f in files)

    def test_nonexistent_raises(self, tmp_path: Path):
        matcher = MultiGlobMatcher(["**/*"])

        with pytest.raises(ScanError, match="does not exist"):
            list(iter_files(tmp_path / "missing", matcher))

    def test_file_raises(self, tmp_path: Path):
        file_path = tmp_path / "file.txt"
        file_path.write_text("content")
        matcher = MultiGlobMatcher(["**/*"])

        with pytest.raises(ScanError, match="not a directory"):
            list(iter_files(file_path, matcher))


class TestReadFirstLine:
    """Tests for read_first_line."""

    def test_reads_only_first_line(self, tmp_path: Path):
        path = tmp_path / "doc.md"
        path.write_text("tags: [#a]\ntags: [#b]\n")

        assert read_first_line(path) == "tags: [#a]\n"

    def test_keeps_crlf(self, tmp_path: Path):
        path = tmp_path / "doc.md"
        path.write_bytes(b"tags: [#a]\r\nbody\r\n")

        assert read_first_line(path) == "tags: [#a]\r\n"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty.md"
        path.write_text("")

        assert read_first_line(path) == ""

    def test_strips_byte_order_mark(self, tmp_path: Path):
        path = tmp_path / "bom.md"
        path.write_bytes(b"\xef\xbb\xbftags: [#a]\n")

        assert read_first_line(path) == "tags: [#a]\n"

    def test_non_ascii_tags(self, tmp_path: Path):
        path = tmp_path / "umlaut.md"
        path.write_text("tags: [#über]\n", encoding="utf-8")

        assert read_first_line(path) == "tags: [#über]\n"

    def test_invalid_bytes_after_first_line_ignored(self, tmp_path: Path):
        path = tmp_path / "mixed.md"
        path.write_bytes(b"tags: [#a]\n\xff\xfe\n")

        assert read_first_line(path) == "tags: [#a]\n"

    def test_invalid_first_line_raises(self, tmp_path: Path):
        path = tmp_path / "binary.bin"
        path.write_bytes(b"\xff\xfe\xfa\n")

        with pytest.raises(UnicodeDecodeError):
            read_first_line(path)

    def test_overlong_line_is_empty(self, tmp_path: Path):
        path = tmp_path / "long.md"
        path.write_text("x" * 100 + "\n")

        assert read_first_line(path, max_length=10) == ""

    def test_overlong_tagline_not_cut_after_bracket(self, tmp_path: Path):
        path = tmp_path / "long.md"
        path.write_text("tags: [#a] garbage after bracket\n")

        assert read_first_line(path, max_length=10) == ""

    def test_line_of_exactly_max_length(self, tmp_path: Path):
        path = tmp_path / "exact.md"
        path.write_bytes(b"tags: [#a]")

        assert read_first_line(path, max_length=10) == "tags: [#a]"

    def test_line_ending_at_max_length(self, tmp_path: Path):
        path = tmp_path / "exact.md"
        path.write_bytes(b"tags: [#]\nmore")

        assert read_first_line(path, max_length=10) == "tags: [#]\n"

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(OSError):
            read_first_line(tmp_path / "missing.md")
