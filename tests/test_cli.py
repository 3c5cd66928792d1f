"""Test scm-workspace CLI commands."""

import json
from pathlib import Path
from unittest.mock import patch

from scm_workspace.cli import scm_workspace


def test_info_not_configured(runner, tmp_path: Path):
    """Test info on an empty workspace."""
    result = runner.invoke(scm_workspace, ["--root", str(tmp_path / "ws"), "info"])

    assert result.exit_code == 0
    assert "not configured" in result.output


def test_info_not_configured_json(runner, tmp_path: Path):
    """Test info --json on an empty workspace."""
    result = runner.invoke(scm_workspace, ["--root", str(tmp_path / "ws"), "info", "--json"])

    assert result.exit_code == 0
    assert json.loads(result.output) == {"root": str(tmp_path / "ws"), "configured": False}


def test_unknown_backend_exit_code(runner, tmp_path: Path):
    """Test errors map to their exit codes."""
    result = runner.invoke(
        scm_workspace, ["--root", str(tmp_path / "ws"), "configure", "http://example.com/repo"]
    )

    assert result.exit_code == 5
    assert "Unknown SCM type" in result.output


def test_status_not_configured(runner, tmp_path: Path):
    """Test mutating commands fail on an empty workspace."""
    result = runner.invoke(scm_workspace, ["--root", str(tmp_path / "ws"), "status"])

    assert result.exit_code == 2
    assert "is not configured" in result.output


def test_configure_forwards_options(runner, tmp_path: Path):
    """Test short flags after the url are not eaten by click."""
    with patch("scm_workspace.cli.Workspace.configure") as mock_configure:
        result = runner.invoke(
            scm_workspace,
            [
                "--root",
                str(tmp_path / "ws"),
                "configure",
                "http://rubeus.googlecode.com/svn",
                "-T",
                "trunk",
                "--branches",
                "branches",
            ],
        )

    assert result.exit_code == 0, result.output
    mock_configure.assert_called_once_with(
        "http://rubeus.googlecode.com/svn -T trunk --branches branches"
    )


def test_full_git_workflow(runner, tmp_path: Path, git_remote):
    """Test configure, checkout, move, status, info and clear end to end."""
    root = str(tmp_path / "ws")

    result = runner.invoke(scm_workspace, ["--root", root, "configure", git_remote["url"]])
    assert result.exit_code == 0, result.output
    assert "(git)" in result.output

    result = runner.invoke(scm_workspace, ["--root", root, "checkout", "0.1"])
    assert result.exit_code == 0, result.output
    assert "On branch 0.1" in result.output

    result = runner.invoke(scm_workspace, ["--root", root, "move", "v0.0.2"])
    assert result.exit_code == 0, result.output
    assert git_remote["c3"] in result.output

    result = runner.invoke(scm_workspace, ["--root", root, "status"])
    assert result.exit_code == 0, result.output
    assert "There is/are 1 commit" in result.output

    result = runner.invoke(scm_workspace, ["--root", root, "fetch"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(scm_workspace, ["--root", root, "info", "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["backend_kind"] == "git"
    assert data["branch"] == "0.1"
    assert data["commit_key"] == git_remote["c3"]
    assert data["current_tags"] == ["v0.0.2"]
    assert sorted(data["branches"]) == ["0.1", "develop", "master"]

    result = runner.invoke(scm_workspace, ["--root", root, "clear"])
    assert result.exit_code == 0, result.output
    assert list(Path(root).iterdir()) == []


def test_already_configured_exit_code(runner, tmp_path: Path, git_remote):
    """Test configuring twice exits with the not-ready code."""
    root = str(tmp_path / "ws")
    runner.invoke(scm_workspace, ["--root", root, "configure", git_remote["url"]])

    result = runner.invoke(scm_workspace, ["--root", root, "configure", git_remote["url"]])

    assert result.exit_code == 2
    assert "not empty" in result.output
