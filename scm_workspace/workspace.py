"""Single working-copy workspace backed by git or git svn."""

import logging
from pathlib import Path
from typing import Optional, Union

from scm_workspace.config import WorkspaceConfig
from scm_workspace.errors import (
    AlreadyConfiguredError,
    NotConfiguredError,
    UnknownBackendError,
)
from scm_workspace.fileutils import remove_entry_secure, working_directory
from scm_workspace.probes.repo import (
    has_git_dir,
    has_git_svn_dir,
    is_dots_only,
    is_empty_dir,
    list_dir,
)
from scm_workspace.scm.base import GitRepository
from scm_workspace.scm.detect import detect_backend, guess_backend, has_remotes
from scm_workspace.scm.git import GitBackend
from scm_workspace.scm.parse import BackendKind, split_source_spec
from scm_workspace.scm.protocol import Backend, CommitInfo
from scm_workspace.scm.svn import GitSvnBackend

logger = logging.getLogger(__name__)

BACKENDS: dict[str, type[GitRepository]] = {
    "git": GitBackend,
    "svn": GitSvnBackend,
}


class Workspace:
    """
    One directory managed through git or git svn.

    The backend is never stored: it is re-detected from the directory on
    every call, so the workspace always reflects what is on disk. Read-only
    queries return None (or an empty list) while the workspace is not
    configured; mutating operations raise NotConfiguredError.

    Not safe for concurrent use: callers must serialize operations on the
    same root.
    """

    def __init__(self, root: Union[str, Path], config: Optional[WorkspaceConfig] = None):
        self.root = Path(root).absolute()
        self.config = config or WorkspaceConfig()
        self.logger = self.config.logger or logger

    def __repr__(self) -> str:
        return f"Workspace({str(self.root)!r})"

    @property
    def verbose(self) -> bool:
        return self.config.verbose

    # State predicates

    def is_accessible(self) -> bool:
        """True if the .git marker directory exists under root."""
        return has_git_dir(self.root)

    def is_configured(self) -> bool:
        """
        True if the workspace has been cloned into.

        Currently the same check as is_accessible(); the two are kept apart
        so callers can express which question they are asking.
        """
        return has_git_dir(self.root)

    def is_cleared(self) -> bool:
        return not self.is_configured()

    def scm_type(self) -> Optional[BackendKind]:
        """
        Backend of the workspace, detected from disk.

        Raises:
            BackendUndeterminedError: If .git exists but no backend applies
        """
        return detect_backend(self.root)

    def git_repo(self) -> Optional[bool]:
        """True if the workspace has git remotes; None if not configured."""
        if not self.is_configured():
            return None
        return has_remotes(self.root)

    def svn_repo(self) -> Optional[bool]:
        """True if git-svn metadata exists; None if not configured."""
        if not self.is_configured():
            return None
        return has_git_svn_dir(self.root)

    def _backend_for(self, kind: BackendKind) -> Backend:
        return BACKENDS[kind](self.root, self.config)  # type: ignore[return-value]

    def _backend(self) -> Optional[Backend]:
        kind = self.scm_type()
        if kind is None:
            return None
        return self._backend_for(kind)

    def _require_backend(self) -> Backend:
        backend = self._backend()
        if backend is None:
            raise NotConfiguredError(self.root)
        return backend

    # Mutating operations

    def configure(self, source_spec: str) -> None:
        """
        Clone a repository into the empty workspace.

        Args:
            source_spec: "<url> [options]", e.g.
                "http://host/svn/repo -T trunk --branches branches --tags tags"

        Raises:
            AlreadyConfiguredError: If root is not empty
            UnknownBackendError: If the URL is neither git nor svn
            CommandFailedError: If the clone fails
        """
        if not is_empty_dir(self.root):
            listing = list_dir(self.root) if self.verbose else None
            raise AlreadyConfiguredError(self.root, listing)

        url, options = split_source_spec(source_spec)
        kind = guess_backend(url)
        if kind is None:
            raise UnknownBackendError(url)

        self.logger.info(f"SCM configure: {kind} {url} -> {self.root}")
        self._backend_for(kind).clone(url, options)

    def clear(self) -> None:
        """
        Remove everything under root, keeping root itself.

        Symlinks are removed without following them. Idempotent; a missing
        root is left missing.
        """
        if not self.root.exists():
            return

        with working_directory(self.root, self.logger):
            for entry in Path(".").iterdir():
                if is_dots_only(entry.name):
                    continue
                self.logger.debug(f"Removing {self.root / entry.name}")
                remove_entry_secure(entry)

    def checkout(self, branch_name: str) -> None:
        """
        Check out branch_name.

        For git the local branch is also hard-reset to origin/<branch_name>,
        discarding local divergence.
        """
        self._require_backend().checkout(branch_name)

    def reset_hard(self, tag: str) -> None:
        """
        Hard-reset the current branch to tag.

        Raises:
            UnsupportedOperationError: For svn workspaces
        """
        self._require_backend().reset_hard(tag)

    move = reset_hard

    def fetch(self) -> None:
        """Fetch remote state (git fetch origin / git svn fetch)."""
        self._require_backend().fetch()

    def status(self) -> str:
        """
        Human-readable summary of how far the checkout is behind.

        Returns:
            "everything is up-to-dated." or a "There is/are N commits" summary
        """
        return self._require_backend().status()

    # Read-only queries

    def current_sha(self) -> Optional[str]:
        if not self.is_accessible():
            return None
        return GitRepository(self.root, self.config).head_sha()

    def current_commit_key(self) -> Optional[str]:
        """
        Identity of the checked-out commit.

        Returns:
            sha for git, "<sha>:<revision>" for svn, None if not configured

        Raises:
            RevisionLookupError: If the svn revision cannot be resolved
        """
        backend = self._backend()
        if backend is None:
            return None
        return backend.current_commit_key()

    def branch_names(self) -> Optional[list[str]]:
        backend = self._backend()
        if backend is None:
            return None
        return backend.branch_names()

    def tag_names(self) -> Optional[list[str]]:
        if not self.is_accessible():
            return None
        return GitRepository(self.root, self.config).tag_names()

    def current_branch_name(self) -> Optional[str]:
        backend = self._backend()
        if backend is None:
            return None
        return backend.current_branch_name()

    def current_tag_names(self) -> Optional[list[str]]:
        if not self.is_accessible():
            return None
        return GitRepository(self.root, self.config).current_tag_names()

    def url(self) -> Optional[str]:
        backend = self._backend()
        if backend is None:
            return None
        return backend.url()

    def remotes(self) -> Optional[list[str]]:
        if not self.is_accessible():
            return None
        return GitRepository(self.root, self.config).remotes()

    def svn_info(self) -> Optional[dict[str, str]]:
        """Parsed `git svn info`; None unless this is an svn workspace."""
        backend = self._backend()
        if not isinstance(backend, GitSvnBackend):
            return None
        return backend.info()

    def commit_info(self) -> Optional[CommitInfo]:
        """Snapshot of backend, url, branch and commit key."""
        backend = self._backend()
        if backend is None:
            return None
        return CommitInfo(
            backend_kind=backend.kind,
            url=backend.url(),
            branch=backend.current_branch_name(),
            commit_key=backend.current_commit_key(),
        )
