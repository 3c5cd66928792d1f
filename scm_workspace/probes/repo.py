"""Filesystem probes for a workspace directory."""

import logging
import re
import stat
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"
GIT_SVN_DIR_NAME = "svn"

_DOTS_ONLY = re.compile(r"\A\.+\Z")


def is_dots_only(name: str) -> bool:
    """True for names like "." and ".." that must never be removed."""
    return bool(_DOTS_ONLY.match(name))


def git_dir(root: Path) -> Path:
    """Path of the .git marker directory."""
    return root / GIT_DIR_NAME


def has_git_dir(root: Path) -> bool:
    """Check whether the .git marker directory exists."""
    return git_dir(root).is_dir()


def has_git_svn_dir(root: Path) -> bool:
    """Check whether git-svn metadata (.git/svn) exists."""
    return (git_dir(root) / GIT_SVN_DIR_NAME).is_dir()


def is_empty_dir(root: Path) -> bool:
    """
    Check whether root holds nothing worth keeping.

    Args:
        root: Workspace directory

    Returns:
        True if root is absent or contains no entries other than dot-only names
    """
    if not root.exists():
        return True
    return not any(not is_dots_only(entry.name) for entry in root.iterdir())


def list_dir(root: Path) -> str:
    """
    Render an `ls -la` style listing of root for diagnostics.

    Args:
        root: Directory to list

    Returns:
        One line per entry (mode, size, mtime, name); empty if root is absent
    """
    if not root.exists():
        return ""

    lines = []
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        info = entry.lstat()
        mtime = datetime.fromtimestamp(info.st_mtime).strftime("%Y-%m-%d %H:%M")
        name = entry.name
        if entry.is_symlink():
            name += f" -> {entry.readlink()}"
        lines.append(f"{stat.filemode(info.st_mode)} {info.st_size:>10} {mtime} {name}")
    return "\n".join(lines)
