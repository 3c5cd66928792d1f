"""Parsers turning git / git-svn text output into workspace metadata."""

import re
import shlex
from typing import Literal, Optional

BackendKind = Literal["git", "svn"]

GIT_REMOTE_BRANCH_PREFIX = "remotes/origin/"
SVN_REMOTE_BRANCH_PREFIX = "remotes/"

SVN_CLONE_OPTIONS: dict[str, str] = {
    "A": "authors_file",
    "b": "branches",
    "m": "minimize_url",
    "q": "quiet",
    "r": "revision",
    "s": "stdlayout",
    "t": "tags",
    "T": "trunk",
}
# Letters whose option takes a value; the others are switches and may be
# bundled ("-qq", "-sq").
SVN_VALUE_OPTIONS = frozenset("AbrtT")

_INFO_LINE = re.compile(r"^(.+?): (.*)$", re.MULTILINE)
_STATUS_BRANCH = re.compile(r"On branch\s*(.+?)\s*$", re.MULTILINE)
_DECORATED_COMMIT = re.compile(r"^commit\s[0-9a-f]+\s\((.+)\)", re.MULTILINE)
_SHORT_FLAGS = re.compile(r"^-([A-Za-z].*)$")
_HEAD_ALIAS = re.compile(r"\AHEAD ->")


def normalize_key(key: str) -> str:
    """Lower-case a key and replace whitespace runs with underscores."""
    return re.sub(r"\s+", "_", key.strip().lower())


def parse_info(text: str) -> dict[str, str]:
    """
    Parse a block of "Key: value" lines (git svn info).

    Args:
        text: Raw command output

    Returns:
        Dict with normalized keys, e.g. "Repository Root" -> "repository_root"
    """
    return {normalize_key(key): value for key, value in _INFO_LINE.findall(text)}


def parse_lines(text: str) -> list[str]:
    """Non-empty stripped lines, first occurrence order, duplicates dropped."""
    result: list[str] = []
    for line in text.splitlines():
        line = line.strip()
        if line and line not in result:
            result.append(line)
    return result


def parse_remote_branches(text: str, prefix: str) -> list[str]:
    """
    Extract remote branch names from `git branch -a` output.

    Args:
        text: Raw `git branch -a` output
        prefix: Remote-tracking prefix to strip ("remotes/origin/" or "remotes/")

    Returns:
        Branch names without the prefix, head-pointer aliases dropped
    """
    branches: list[str] = []
    for line in text.splitlines():
        name = line.strip().lstrip("*").strip()
        if not name.startswith("remotes/"):
            continue
        if name.startswith(prefix):
            name = name[len(prefix) :]
        if _HEAD_ALIAS.match(name) or name == "HEAD":
            continue
        branches.append(name)
    return branches


def parse_status_branch(text: str) -> Optional[str]:
    """Branch name from the "On branch <name>" line of `git status`."""
    match = _STATUS_BRANCH.search(text)
    if not match:
        return None
    return match.group(1) or None


def parse_decorated_branch(text: str) -> Optional[str]:
    """
    Branch name from the decoration of `git log --decorate -1`.

    Labels ending in HEAD are dropped, an origin/ qualified label is
    preferred over a bare one, and the origin/ prefix is stripped.

    Args:
        text: Raw `git log --decorate -1` output

    Returns:
        Branch name or None if the commit carries no usable label
    """
    match = _DECORATED_COMMIT.search(text)
    if not match:
        return None

    labels = []
    for label in match.group(1).split(","):
        label = label.strip()
        if label.startswith("HEAD -> "):
            label = label[len("HEAD -> ") :]
        if not label or label.endswith("HEAD") or label.startswith("tag: "):
            continue
        labels.append(label)

    if not labels:
        return None

    chosen = next((label for label in labels if "origin/" in label), labels[0])
    return re.sub(r"\Aorigin/", "", chosen)


def parse_behind_count(text: str, branch: str) -> Optional[str]:
    """
    Extract "N commits" from git status when behind origin/<branch>.

    Args:
        text: Raw `git status` output
        branch: Current branch name

    Returns:
        e.g. "7 commits", or None if the branch is not behind
    """
    pattern = re.compile(
        rf"Your branch is behind 'origin/{re.escape(branch)}' by (\d+\s+commits?)"
    )
    match = pattern.search(text)
    return match.group(1) if match else None


def svn_branch_name(info: dict[str, str], branch_prefix: str) -> Optional[str]:
    """
    Logical svn branch name from git svn info.

    Strips the repository root from the URL, then the leading "/", then the
    first "<branch_prefix>/" segment: ".../branches/rmaven" -> "rmaven",
    ".../trunk" -> "trunk", ".../tags/0.0.8" -> "tags/0.0.8".

    Args:
        info: Parsed git svn info
        branch_prefix: Segment under which svn branches live

    Returns:
        Branch name, or None if the info lacks url/repository_root
    """
    url = info.get("url")
    root = info.get("repository_root")
    if url is None or root is None:
        return None

    name = url.replace(root, "", 1)
    name = re.sub(r"\A/", "", name)
    return name.replace(f"{branch_prefix}/", "", 1)


def split_source_spec(source_spec: str) -> tuple[str, str]:
    """Split "<url> [options]" into (url, raw option tail)."""
    parts = source_spec.strip().split(None, 1)
    if not parts:
        return "", ""
    url = parts[0]
    tail = parts[1] if len(parts) > 1 else ""
    return url, tail


def _expand_svn_flag(token: str) -> list[str]:
    match = _SHORT_FLAGS.match(token)
    if not match:
        return [token]

    expanded: list[str] = []
    letters = match.group(1)
    while letters:
        letter, rest = letters[0], letters[1:]
        if letter not in SVN_CLONE_OPTIONS:
            expanded.append(f"-{letters}")
            break
        long_name = "--" + SVN_CLONE_OPTIONS[letter].replace("_", "-")
        if letter in SVN_VALUE_OPTIONS:
            expanded.append(f"{long_name}={rest}" if rest else long_name)
            break
        expanded.append(long_name)
        letters = rest
    return expanded


def expand_svn_clone_options(tail: str) -> list[str]:
    """
    Expand single-letter `git svn clone` flags to long options.

    "-T trunk" -> ["--trunk", "trunk"], "-Aauthors.txt" ->
    ["--authors-file=authors.txt"], "-qq" -> ["--quiet", "--quiet"].
    Switches may be bundled; a value letter takes the rest of its token.
    Unknown short flags and everything else pass through untouched.

    Args:
        tail: Raw option string following the URL

    Returns:
        Argument list ready to append to the clone command
    """
    args: list[str] = []
    for token in shlex.split(tail):
        args.extend(_expand_svn_flag(token))
    return args
