"""SCM abstraction layer."""

from scm_workspace.scm.detect import detect_backend, guess_backend
from scm_workspace.scm.git import GitBackend
from scm_workspace.scm.protocol import Backend, CommitInfo
from scm_workspace.scm.svn import GitSvnBackend

__all__ = [
    "Backend",
    "CommitInfo",
    "GitBackend",
    "GitSvnBackend",
    "detect_backend",
    "guess_backend",
]
