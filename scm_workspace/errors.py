"""scm-workspace exception hierarchy with exit codes."""

from pathlib import Path
from typing import Optional, Sequence

# Exit code constants (simple 0-5 range)
EXIT_SUCCESS = 0  # Operation succeeded
EXIT_ERROR = 1  # Generic error / command failure
EXIT_NOT_READY = 2  # Workspace state precondition failed
EXIT_USAGE = 5  # Invalid usage / arguments


class ScmWorkspaceError(Exception):
    """Base exception for all scm-workspace errors."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class ConfigError(ScmWorkspaceError):
    """Configuration errors (invalid values, unreadable files)."""

    exit_code = EXIT_ERROR

    def __init__(self, message: str = "Configuration error"):
        super().__init__(message, exit_code=self.exit_code)


class AlreadyConfiguredError(ScmWorkspaceError):
    """configure() called on a workspace that is not empty."""

    exit_code = EXIT_NOT_READY

    def __init__(self, root: Path, listing: Optional[str] = None):
        message = f"{root} is not empty. You must clear it"
        if listing:
            message += f"\nls -la {root}\n{listing}"
        super().__init__(message, exit_code=self.exit_code)
        self.root = root


class NotConfiguredError(ScmWorkspaceError):
    """A mutating operation was called on an unconfigured workspace."""

    exit_code = EXIT_NOT_READY

    def __init__(self, root: Path):
        super().__init__(f"{root} is not configured", exit_code=self.exit_code)
        self.root = root


class UnknownBackendError(ScmWorkspaceError):
    """URL matches neither the git nor the svn recognition pattern."""

    exit_code = EXIT_USAGE

    def __init__(self, url: str):
        super().__init__(f"Unknown SCM type: {url}", exit_code=self.exit_code)
        self.url = url


class BackendUndeterminedError(ScmWorkspaceError):
    """
    Workspace has a .git marker but neither remotes nor a git-svn directory.

    This is a configuration anomaly and is never mapped to a default backend.
    """

    exit_code = EXIT_ERROR

    def __init__(self, root: Path):
        super().__init__(
            f"Cannot determine SCM type of {root}: no remotes and no git-svn metadata",
            exit_code=self.exit_code,
        )
        self.root = root


class UnsupportedOperationError(ScmWorkspaceError):
    """Operation is structurally impossible for the workspace's backend."""

    exit_code = EXIT_USAGE

    def __init__(self, operation: str, backend: str):
        super().__init__(
            f"Illegal operation for {backend}: {operation}", exit_code=self.exit_code
        )
        self.operation = operation
        self.backend = backend


class CommandFailedError(ScmWorkspaceError):
    """
    External command exited non-zero.

    Carries the full command line and the combined stdout/stderr output.
    """

    exit_code = EXIT_ERROR

    def __init__(self, command: Sequence[str], output: str = "", returncode: int = 1):
        self.command = list(command)
        self.output = output
        self.returncode = returncode
        message = f"Command failed ({returncode}): {' '.join(self.command)}"
        if output:
            message += f"\n{output}"
        super().__init__(message, exit_code=self.exit_code)

    @property
    def command_line(self) -> str:
        """Command as a single string."""
        return " ".join(self.command)


class RevisionLookupError(ScmWorkspaceError):
    """git svn find-rev kept returning nothing for a commit."""

    exit_code = EXIT_ERROR

    def __init__(self, sha: str, attempts: int):
        super().__init__(
            f"failed to get svn revision for {sha} after {attempts} attempts",
            exit_code=self.exit_code,
        )
        self.sha = sha
        self.attempts = attempts
