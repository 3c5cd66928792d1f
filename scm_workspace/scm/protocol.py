"""SCM abstraction layer for workspace backends."""

from dataclasses import dataclass
from typing import Optional, Protocol

from scm_workspace.scm.parse import BackendKind


@dataclass
class CommitInfo:
    """Snapshot of what a workspace currently has checked out."""

    backend_kind: BackendKind
    url: Optional[str]
    branch: Optional[str]
    commit_key: str


class Backend(Protocol):
    """Version control backend driving one workspace directory."""

    kind: BackendKind

    def clone(self, url: str, options: str = "") -> None:
        """
        Clone url into the workspace root.

        Args:
            url: Repository URL
            options: Raw option tail from the source spec

        Raises:
            CommandFailedError: If the clone command fails
        """

    def checkout(self, branch_name: str) -> None:
        """
        Check out branch_name so the working tree mirrors it.

        Args:
            branch_name: Branch to check out
        """

    def reset_hard(self, ref: str) -> None:
        """
        Hard-reset the current branch to ref.

        Args:
            ref: Tag or commit

        Raises:
            UnsupportedOperationError: If the backend cannot reset
        """

    def fetch(self) -> None:
        """Refresh remote state without touching the working tree."""

    def status(self) -> str:
        """
        Summarize how far the checkout lags behind its upstream.

        Returns:
            Human-readable summary
        """

    def current_commit_key(self) -> str:
        """
        Canonical identity of the checked-out commit.

        Returns:
            Commit key string
        """

    def branch_names(self) -> list[str]:
        """
        List remote branch names.

        Returns:
            Branch names without remote-tracking prefixes
        """

    def url(self) -> Optional[str]:
        """
        URL the workspace was cloned from.

        Returns:
            URL, or None if it cannot be determined
        """

    def current_branch_name(self) -> Optional[str]:
        """
        Name of the checked-out branch.

        Returns:
            Branch name, or None if it cannot be determined
        """
