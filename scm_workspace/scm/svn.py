"""Subversion backend driven through git svn."""

import logging
import time
from typing import Literal, Optional

from scm_workspace.errors import RevisionLookupError, UnsupportedOperationError
from scm_workspace.fileutils import working_directory
from scm_workspace.probes.tools import run_command_output
from scm_workspace.scm.base import GitRepository
from scm_workspace.scm.parse import (
    SVN_REMOTE_BRANCH_PREFIX,
    expand_svn_clone_options,
    parse_info,
    parse_lines,
    parse_remote_branches,
    svn_branch_name,
)

logger = logging.getLogger(__name__)

UP_TO_DATE = "everything is up-to-dated."


class GitSvnBackend(GitRepository):
    """Workspace mirroring a Subversion repository with git svn."""

    kind: Literal["git", "svn"] = "svn"

    def clone(self, url: str, options: str = "") -> None:
        """
        Mirror an svn repository into the workspace root.

        Options such as "-T trunk --branches branches --tags tags" are
        forwarded after short-flag expansion.

        Args:
            url: Subversion repository URL
            options: Raw `git svn clone` options

        Raises:
            CommandFailedError: If git svn clone fails
        """
        args = expand_svn_clone_options(options)
        parent = self.root.parent
        parent.mkdir(parents=True, exist_ok=True)
        cmd = ["git", "svn", "clone", url, str(self.root), *args]

        self.announce("*" * 100)
        self.announce(f"cd {parent} && {' '.join(cmd)}")
        with working_directory(parent, self.logger):
            output = run_command_output(cmd)
        if output:
            self.logger.debug(output)

    def checkout(self, branch_name: str) -> None:
        self.announce("-" * 100)
        super().checkout(branch_name)

    def reset_hard(self, ref: str) -> None:
        raise UnsupportedOperationError(f"reset --hard {ref}", "svn")

    def fetch(self) -> None:
        self.announce("-" * 100)
        self.announce("git svn fetch")
        self.git("svn", "fetch")

    def find_rev(self, sha: str) -> str:
        """svn revision of sha; empty while the git-svn index lags."""
        return self.git("svn", "find-rev", sha)

    def status(self) -> str:
        """
        Report commits on any branch that HEAD does not contain yet.

        Returns:
            "everything is up-to-dated." or a summary naming the count and
            the svn revisions of HEAD and of the newest such commit
        """
        current_sha = self.head_sha()
        cmd = ("log", "--branches", "--remotes", "--format=%H", f"{current_sha}..")
        self.announce("git " + " ".join(cmd))
        lines = parse_lines(self.git(*cmd))
        if not lines:
            return UP_TO_DATE

        latest_sha = lines[0]
        return (
            f"There is/are {len(lines)} commits."
            f" current revision: {self.find_rev(current_sha)}"
            f" latest revision: {self.find_rev(latest_sha)}"
        )

    def current_commit_key(self) -> str:
        """
        "<sha>:<svn revision>" for HEAD.

        Raises:
            RevisionLookupError: If find-rev stays empty for every attempt
        """
        sha = self.head_sha()
        attempts = self.config.revision_lookup_attempts
        for attempt in range(1, attempts + 1):
            rev = self.find_rev(sha)
            if rev:
                return f"{sha}:{rev}"
            self.logger.debug(f"git svn find-rev {sha} empty (attempt {attempt}/{attempts})")
            if attempt < attempts and self.config.revision_lookup_delay:
                time.sleep(self.config.revision_lookup_delay)
        raise RevisionLookupError(sha, attempts)

    def info(self) -> dict[str, str]:
        """Parsed `git svn info`."""
        return parse_info(self.git("svn", "info"))

    def branch_names(self) -> list[str]:
        return parse_remote_branches(self.all_branches_output(), SVN_REMOTE_BRANCH_PREFIX)

    def url(self) -> Optional[str]:
        return self.info().get("repository_root")

    def current_branch_name(self) -> Optional[str]:
        return svn_branch_name(self.info(), self.config.svn_branch_prefix)
