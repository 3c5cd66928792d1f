"""Directory helpers: scoped chdir and symlink-safe removal."""

import contextlib
import logging
import os
import shutil
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def working_directory(
    path: Path, log: Optional[logging.Logger] = None
) -> Iterator[Path]:
    """
    Change into path for the duration of the block.

    The previous working directory is restored on every exit path,
    including exceptions raised inside the block.

    Args:
        path: Directory to change into
        log: Optional logger receiving "cd <dir>" and "cd -" entries

    Yields:
        The directory that was entered
    """
    previous = os.getcwd()
    os.chdir(path)
    if log is not None:
        log.debug(f"cd {path}")
    try:
        yield Path(path)
    finally:
        os.chdir(previous)
        if log is not None:
            log.debug("cd -")


def remove_entry_secure(path: Path) -> None:
    """
    Remove a file, symlink or directory tree without following symlinks.

    Symlinks are unlinked themselves, never their targets. Directory trees
    are removed with shutil.rmtree, which does not descend into symlinked
    directories.

    Args:
        path: Entry to remove
    """
    if path.is_symlink() or not path.is_dir():
        path.unlink()
        return

    if not shutil.rmtree.avoids_symlink_attacks:
        logger.debug(f"rmtree is not symlink-attack resistant on this platform: {path}")
    shutil.rmtree(path)
