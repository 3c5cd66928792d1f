"""Subprocess execution utilities."""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from scm_workspace.errors import CommandFailedError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Exit status and combined stdout/stderr of a finished command."""

    returncode: int
    output: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


def run_command(
    cmd: list[str],
    cwd: Optional[Path] = None,
    check: bool = True,
) -> CommandResult:
    """
    Run a subprocess command and capture its combined output.

    Messages are forced to the C locale so output patterns stay stable.

    Args:
        cmd: Command and arguments as list (safe, no shell injection)
        cwd: Working directory (optional)
        check: Raise exception on non-zero exit

    Returns:
        CommandResult with exit code and stdout+stderr text

    Raises:
        CommandFailedError: If command fails and check=True
    """
    logger.debug(f"Running: {' '.join(cmd)} (cwd={cwd})")

    result = subprocess.run(
        cmd,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        check=False,
        cwd=cwd,
        env={**os.environ, "LC_ALL": "C"},
    )

    if check and result.returncode != 0:
        error = CommandFailedError(cmd, result.stdout or "", result.returncode)
        logger.error(error.message)
        raise error

    logger.debug(f"Exit code: {result.returncode}")
    return CommandResult(returncode=result.returncode, output=result.stdout or "")


def run_command_output(cmd: list[str], cwd: Optional[Path] = None) -> str:
    """
    Run command in specific directory and return its output.

    Args:
        cmd: Command and arguments as list
        cwd: Working directory (optional)

    Returns:
        Combined output as string (stripped)

    Raises:
        CommandFailedError: If command fails
    """
    return run_command(cmd, cwd=cwd, check=True).output.strip()
