"""Git command plumbing shared by the git and git-svn backends."""

import logging
from pathlib import Path
from typing import Optional

import click

from scm_workspace.config import WorkspaceConfig
from scm_workspace.probes.tools import run_command, run_command_output
from scm_workspace.scm.parse import parse_lines

logger = logging.getLogger(__name__)


class GitRepository:
    """Runs git commands inside one workspace root."""

    def __init__(self, root: Path, config: Optional[WorkspaceConfig] = None):
        self.root = root
        self.config = config or WorkspaceConfig()
        self.logger = self.config.logger or logger

    def announce(self, message: str) -> None:
        """Log message and echo it to stdout in verbose mode."""
        self.logger.info(message)
        if self.config.verbose:
            click.echo(message)

    def git(self, *args: str, cwd: Optional[Path] = None) -> str:
        """
        Run a git subcommand in the workspace root.

        Args:
            args: Arguments following "git"
            cwd: Working directory override

        Returns:
            Command output (stripped)

        Raises:
            CommandFailedError: If git exits non-zero
        """
        cmd = ["git", *args]
        self.logger.debug(" ".join(cmd))
        return run_command_output(cmd, cwd=cwd or self.root)

    def try_git(self, *args: str) -> Optional[str]:
        """Like git(), but returns None instead of raising on failure."""
        cmd = ["git", *args]
        self.logger.debug(" ".join(cmd))
        result = run_command(cmd, cwd=self.root, check=False)
        if not result.success:
            return None
        return result.output.strip()

    def head_sha(self) -> str:
        """Full sha of HEAD."""
        return self.git("rev-parse", "HEAD")

    def remotes(self) -> list[str]:
        """Configured remote names."""
        return parse_lines(self.git("remote"))

    def tag_names(self) -> list[str]:
        """All tag names, duplicates removed."""
        return parse_lines(self.git("tag"))

    def current_tag_names(self) -> list[str]:
        """
        Tags pointing at HEAD.

        `git describe --exact-match` failing means HEAD carries no tag;
        that failure is reported as an empty list.
        """
        if self.try_git("describe", "--tags", "--exact-match", "HEAD") is None:
            return []
        return parse_lines(self.git("tag", "--points-at", "HEAD"))

    def all_branches_output(self) -> str:
        """Raw `git branch -a` listing."""
        return self.git("branch", "-a", "--no-color")

    def checkout(self, branch_name: str) -> None:
        self.announce(f"git checkout {branch_name}")
        self.git("checkout", branch_name)
