"""Backend classification by URL and by workspace state."""

import logging
import re
from pathlib import Path
from typing import Optional

from scm_workspace.errors import BackendUndeterminedError
from scm_workspace.probes.repo import has_git_dir, has_git_svn_dir
from scm_workspace.probes.tools import run_command
from scm_workspace.scm.parse import BackendKind, parse_lines

logger = logging.getLogger(__name__)

_GIT_URL_PATTERNS = (
    re.compile(r"\Agit://"),
    re.compile(r"\Agit@"),
    re.compile(r"\.git\Z"),
)
_SVN_URL_PATTERN = re.compile(r"svn")


def guess_backend(url: str) -> Optional[BackendKind]:
    """
    Classify a repository URL.

    git patterns win over the svn substring, so
    "https://host/svn-mirror.git" is a git URL.

    Args:
        url: Repository URL (without options)

    Returns:
        "git", "svn", or None if neither pattern matches
    """
    if any(pattern.search(url) for pattern in _GIT_URL_PATTERNS):
        return "git"
    if _SVN_URL_PATTERN.search(url):
        return "svn"
    return None


def has_remotes(root: Path) -> bool:
    """
    Check whether the repository at root has at least one remote.

    A failing `git remote` counts as no remotes.
    """
    result = run_command(["git", "remote"], cwd=root, check=False)
    if not result.success:
        logger.debug(f"git remote failed in {root}: {result.output.strip()}")
        return False
    return bool(parse_lines(result.output))


def detect_backend(root: Path) -> Optional[BackendKind]:
    """
    Classify an existing workspace.

    Args:
        root: Workspace directory

    Returns:
        None if root has no .git marker, "git" if it has remotes,
        "svn" if it has git-svn metadata

    Raises:
        BackendUndeterminedError: If the marker exists but neither applies
    """
    if not has_git_dir(root):
        return None
    if has_remotes(root):
        return "git"
    if has_git_svn_dir(root):
        return "svn"
    logger.error(f"Workspace {root} has a .git directory but no detectable backend")
    raise BackendUndeterminedError(root)
