"""Git SCM backend implementation."""

import logging
import shlex
from typing import Literal, Optional

from scm_workspace.scm.base import GitRepository
from scm_workspace.scm.parse import (
    GIT_REMOTE_BRANCH_PREFIX,
    parse_behind_count,
    parse_decorated_branch,
    parse_remote_branches,
    parse_status_branch,
)

logger = logging.getLogger(__name__)

UP_TO_DATE = "everything is up-to-dated."


class GitBackend(GitRepository):
    """Workspace cloned from a git remote named origin."""

    kind: Literal["git", "svn"] = "git"

    def clone(self, url: str, options: str = "") -> None:
        """
        Clone url into the workspace root.

        Args:
            url: Git repository URL
            options: Raw `git clone` options, forwarded verbatim

        Raises:
            CommandFailedError: If git clone fails
        """
        args = shlex.split(options)
        self.root.parent.mkdir(parents=True, exist_ok=True)
        self.announce("*" * 100)
        self.announce(f"git clone {' '.join([*args, url, str(self.root)])}")
        self.git("clone", *args, url, str(self.root), cwd=self.root.parent)

    def checkout(self, branch_name: str) -> None:
        """
        Check out branch_name and force it onto origin/<branch_name>.

        A plain checkout does not fast-forward a stale local branch, so the
        local branch is hard-reset to its remote counterpart.
        """
        self.announce("-" * 100)
        super().checkout(branch_name)
        self.announce(f"git reset --hard origin/{branch_name}")
        self.git("reset", "--hard", f"origin/{branch_name}")

    def reset_hard(self, ref: str) -> None:
        self.announce("-" * 100)
        self.announce(f"git reset --hard {ref}")
        self.git("reset", "--hard", ref)

    def fetch(self) -> None:
        self.announce("-" * 100)
        self.announce("git fetch origin")
        self.git("fetch", "origin")

    def status(self) -> str:
        """
        Report how many commits the current branch is behind origin.

        Returns:
            "There is/are N commits" or "everything is up-to-dated."
        """
        self.announce("-" * 100)
        self.announce("git status")
        status_text = self.git("status")
        branch = self.current_branch_name()
        if not branch:
            return UP_TO_DATE

        behind = parse_behind_count(status_text, branch)
        if behind:
            return f"There is/are {behind}"
        return UP_TO_DATE

    def current_commit_key(self) -> str:
        return self.head_sha()

    def branch_names(self) -> list[str]:
        return parse_remote_branches(self.all_branches_output(), GIT_REMOTE_BRANCH_PREFIX)

    def url(self) -> Optional[str]:
        return self.try_git("config", "--get", "remote.origin.url") or None

    def current_branch_name(self) -> Optional[str]:
        """
        Resolve the checked-out branch name.

        Tries, in order: the symbolic HEAD ref, the "On branch" line of
        git status, and the decoration of the latest commit. A detached or
        freshly reset HEAD may only expose the last one.

        Returns:
            Branch name or None
        """
        name = self.try_git("symbolic-ref", "--short", "HEAD")
        if name:
            return name

        name = parse_status_branch(self.git("status"))
        if name:
            return name

        return parse_decorated_branch(self.git("log", "--decorate=short", "--no-color", "-1"))
