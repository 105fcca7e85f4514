"""Filter and action commands run on matched files.

Every ``#FILE#`` in a command is replaced by the file's path before the
command is handed to the shell (``bash -c`` by default, ``cmd /C`` on
Windows).
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

from loguru import logger

from ..core.config import CommandConfig
from ..core.exceptions import CommandError
from ..core.types import CommandResult

FILE_PLACEHOLDER = "#FILE#"


def substitute_file(command: str, path: Path | str) -> str:
    """Replace every ``#FILE#`` in ``command`` with ``path``."""
    return command.replace(FILE_PLACEHOLDER, str(path))


def shell_argv(command: str, shell: str = "bash") -> list[str]:
    """Build the argument vector that runs ``command`` through a shell."""
    if os.name == "nt":
        return ["cmd", "/C", command]
    return [shell, "-c", command]


def run_command(
    command: str,
    path: Path | str,
    config: CommandConfig | None = None,
) -> CommandResult:
    """Run a command for one file and capture its output.

    Args:
        command: Command template, may contain ``#FILE#``.
        path: File substituted for ``#FILE#``.
        config: Shell and timeout settings.

    Returns:
        CommandResult with exit status and captured output.

    Raises:
        CommandError: If the shell cannot be started or the command times out.
    """
    config = config or CommandConfig()
    resolved = substitute_file(command, path)

    try:
        completed = subprocess.run(
            shell_argv(resolved, config.shell),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=config.timeout,
        )
    except subprocess.TimeoutExpired as e:
        logger.error(f"Command timed out after {config.timeout}s: {resolved}")
        raise CommandError(resolved, f"timed out after {config.timeout}s") from e
    except OSError as e:
        logger.error(f"Wasn't able to execute command {resolved}: {e}")
        raise CommandError(resolved, str(e)) from e

    logger.debug(f"Command exited with {completed.returncode}: {resolved}")
    return CommandResult(
        command=resolved,
        return_code=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


def run_filter_command(
    command: str,
    path: Path | str,
    config: CommandConfig | None = None,
) -> bool:
    """Run a filter command; the file passes if it exits with status 0."""
    return run_command(command, path, config).success
