"""Test fixtures and utilities."""

import logging
import os
import subprocess
from pathlib import Path
from typing import Callable, Generator, Union
from unittest.mock import patch

import click.testing
import pytest

from scm_workspace.config import WorkspaceConfig
from scm_workspace.logging import HANDLER_NAME, PACKAGE_LOGGER

GIT_ENV = {
    "GIT_AUTHOR_NAME": "Test User",
    "GIT_AUTHOR_EMAIL": "test@example.com",
    "GIT_COMMITTER_NAME": "Test User",
    "GIT_COMMITTER_EMAIL": "test@example.com",
    "GIT_CONFIG_NOSYSTEM": "1",
    "LC_ALL": "C",
}


def git(cwd: Path, *args: str) -> str:
    """Run git for fixture setup and return stdout."""
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
        env={**os.environ, **GIT_ENV},
    )
    return result.stdout.strip()


def commit(repo: Path, filename: str, content: str) -> str:
    """Write a file, commit it, return the new sha."""
    (repo / filename).write_text(content)
    git(repo, "add", filename)
    git(repo, "commit", "-q", "-m", f"Update {filename}")
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture
def run_git() -> Callable[..., str]:
    """The git() helper, for tests that poke at repositories directly."""
    return git


@pytest.fixture(autouse=True)
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Commit identity for git commands run by the code under test."""
    for key, value in GIT_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Drop handlers the CLI attaches so they never outlive a test's streams."""
    yield
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def git_remote(tmp_path: Path) -> dict[str, Union[Path, str]]:
    """
    Bare repository standing in for a remote.

    History:
        master:  c1 [v0.0.1]
        develop: c1 - c2 - c3 [v0.0.2]   (default branch)
        0.1:     c3 - c4 [v0.1.0]

    Returns:
        Dict with "url" (path ending in .git) and the commit shas
    """
    src = tmp_path / "src"
    src.mkdir()
    git(src, "init", "-q")
    git(src, "symbolic-ref", "HEAD", "refs/heads/master")

    c1 = commit(src, "README.md", "# sandbox\n")
    git(src, "tag", "v0.0.1")

    git(src, "checkout", "-q", "-b", "develop")
    c2 = commit(src, "a.txt", "a\n")
    c3 = commit(src, "b.txt", "b\n")
    git(src, "tag", "v0.0.2")

    git(src, "checkout", "-q", "-b", "0.1")
    c4 = commit(src, "c.txt", "c\n")
    git(src, "tag", "v0.1.0")

    git(src, "checkout", "-q", "develop")

    remote = tmp_path / "sandbox.git"
    git(tmp_path, "clone", "-q", "--bare", str(src), str(remote))

    return {"url": str(remote), "path": remote, "c1": c1, "c2": c2, "c3": c3, "c4": c4}


@pytest.fixture
def workspace_root(tmp_path: Path) -> Path:
    """Workspace directory that does not exist yet."""
    return tmp_path / "workspace"


@pytest.fixture
def quiet_config() -> WorkspaceConfig:
    """Config without retry delays."""
    return WorkspaceConfig(revision_lookup_delay=0)


@pytest.fixture
def runner() -> click.testing.CliRunner:
    """Click CliRunner for testing CLI commands."""
    return click.testing.CliRunner()


def fake_git(responses: dict[tuple[str, ...], Union[str, Callable[..., str]]]):
    """
    Build a side_effect for a patched run_command_output.

    Keys are git argument prefixes (without "git"); the longest matching
    prefix wins. Values are output strings or callables returning one.
    """

    def _run(cmd: list[str], cwd: Union[Path, None] = None) -> str:
        args = tuple(cmd[1:])
        matches = [key for key in responses if args[: len(key)] == key]
        if not matches:
            raise AssertionError(f"Unexpected command: {cmd}")
        value = responses[max(matches, key=len)]
        return value(*args) if callable(value) else value

    return _run


@pytest.fixture
def patch_git() -> Generator[Callable[..., object], None, None]:
    """
    Patch GitRepository command execution at a single point.

    Yields:
        Function taking a responses dict (see fake_git) and returning the mock
    """
    with patch("scm_workspace.scm.base.run_command_output") as mock_output:

        def _install(responses: dict[tuple[str, ...], Union[str, Callable[..., str]]]):
            mock_output.side_effect = fake_git(responses)
            return mock_output

        yield _install
