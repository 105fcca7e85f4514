"""Configuration management for tagsearch."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .exceptions import ConfigError


def _default_glob_patterns() -> list[str]:
    return ["**/*", "!**/.git/**"]


@dataclass
class ScanConfig:
    """File scanning configuration."""

    glob_patterns: list[str] = field(default_factory=_default_glob_patterns)
    # utf-8-sig strips a byte order mark in front of the tagline
    encoding: str = "utf-8-sig"
    max_line_length: int = 4096
    workers: int = 1


@dataclass
class CommandConfig:
    """Filter/action command configuration."""

    shell: str = "bash"
    timeout: float | None = None


@dataclass
class Config:
    """Main application configuration."""

    log_level: str = "WARNING"
    scan: ScanConfig = field(default_factory=ScanConfig)
    commands: CommandConfig = field(default_factory=CommandConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config.apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path | str) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML file.

        Returns:
            Config with file values and environment overrides applied.

        Raises:
            ConfigError: If the file cannot be read or parsed.
        """
        path = Path(path)
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

        config = cls()
        config.apply_mapping(data)
        config.apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | str | None = None) -> "Config":
        """Load from an explicit path, $TAGSEARCH_CONFIG, or the environment only."""
        if path is None:
            path = os.environ.get("TAGSEARCH_CONFIG")
        if path:
            return cls.from_file(path)
        return cls.from_env()

    def apply_mapping(self, data: dict[str, Any]) -> None:
        """Apply values from a parsed TOML document."""
        if "log_level" in data:
            self.log_level = str(data["log_level"]).upper()

        scan = data.get("scan", {})
        if "glob_patterns" in scan:
            patterns = scan["glob_patterns"]
            self.scan.glob_patterns = [patterns] if isinstance(patterns, str) else list(patterns)
        if "encoding" in scan:
            self.scan.encoding = scan["encoding"]
        if "max_line_length" in scan:
            self.scan.max_line_length = int(scan["max_line_length"])
        if "workers" in scan:
            self.scan.workers = int(scan["workers"])

        commands = data.get("commands", {})
        if "shell" in commands:
            self.commands.shell = commands["shell"]
        if "timeout" in commands:
            self.commands.timeout = float(commands["timeout"])

    def apply_env(self) -> None:
        """Apply TAGSEARCH_* environment overrides."""
        if level := os.environ.get("TAGSEARCH_LOG_LEVEL"):
            self.log_level = level.upper()

        if patterns := os.environ.get("TAGSEARCH_GLOB"):
            self.scan.glob_patterns = [p.strip() for p in patterns.split(",") if p.strip()]

        if workers := os.environ.get("TAGSEARCH_WORKERS"):
            try:
                self.scan.workers = int(workers)
            except ValueError as e:
                raise ConfigError(f"TAGSEARCH_WORKERS must be an integer, got {workers!r}") from e

        if shell := os.environ.get("TAGSEARCH_SHELL"):
            self.commands.shell = shell

        if timeout := os.environ.get("TAGSEARCH_COMMAND_TIMEOUT"):
            try:
                self.commands.timeout = float(timeout)
            except ValueError as e:
                raise ConfigError(
                    f"TAGSEARCH_COMMAND_TIMEOUT must be a number, got {timeout!r}"
                ) from e
