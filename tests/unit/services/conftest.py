"""Pytest configuration and fixtures for service layer tests."""

import pytest

from tagsearch.core.config import CommandConfig


@pytest.fixture
def command_config() -> CommandConfig:
    """Run commands through POSIX sh with a generous timeout."""
    return CommandConfig(shell="sh", timeout=30.0)
