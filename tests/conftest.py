"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path

from tagsearch.core.config import Config


@pytest.fixture
def config() -> Config:
    """Provide a default Config instance."""
    return Config()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep TAGSEARCH_* variables from the caller's shell out of tests."""
    for name in (
        "TAGSEARCH_CONFIG",
        "TAGSEARCH_LOG_LEVEL",
        "TAGSEARCH_GLOB",
        "TAGSEARCH_WORKERS",
        "TAGSEARCH_SHELL",
        "TAGSEARCH_COMMAND_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tagged_tree(tmp_path: Path) -> Path:
    """Create a small directory of tagged and untagged files.

    Layout:
        a.md               tags: a, b
        b.txt              tags: b, c
        sub/c.md           tags: c
        sub/late.md        tagline on second line only (no tags)
        empty.md           empty file
        binary.bin         not valid UTF-8
        .git/HEAD          tags: a (excluded by default)
    """
    (tmp_path / "a.md").write_text("tags: [#a #b]\n# Title\n\nBody text.\n")
    (tmp_path / "b.txt").write_text("tags: [#b #c]\n")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "c.md").write_text("tags: [#c]\n")
    (sub / "late.md").write_text("Just some notes\ntags: [#a]\n")
    (tmp_path / "empty.md").write_text("")
    (tmp_path / "binary.bin").write_bytes(b"\xff\xfe\xfa\x00tags: [#a]\n")
    git = tmp_path / ".git"
    git.mkdir()
    (git / "HEAD").write_text("tags: [#a]\n")
    return tmp_path
