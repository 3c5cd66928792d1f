"""scm-workspace CLI entrypoint."""

import json
import logging
import shlex
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import click

from scm_workspace.config import get_config
from scm_workspace.errors import EXIT_ERROR, ScmWorkspaceError
from scm_workspace.logging import setup_logging
from scm_workspace.workspace import Workspace

logger = logging.getLogger(__name__)


class _WorkspaceGroup(click.Group):
    """Group that turns ScmWorkspaceError into a message and exit code."""

    def invoke(self, ctx: click.Context) -> object:
        try:
            return super().invoke(ctx)
        except ScmWorkspaceError as e:
            logger.debug(f"{type(e).__name__}: {e.message}")
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(e.exit_code or EXIT_ERROR)


@click.group(cls=_WorkspaceGroup)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging and command echo")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="INI config file",
)
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="SCM_WORKSPACE_ROOT",
    default=".",
    show_default=True,
    help="Workspace directory",
)
@click.version_option(package_name="scm-workspace")
@click.pass_context
def scm_workspace(
    ctx: click.Context, verbose: bool, config_path: Optional[Path], root: Path
) -> None:
    """scm-workspace - drive one git or git-svn working copy."""
    setup_logging(verbose=verbose)
    config = get_config(config_path)
    if verbose:
        config.verbose = True
    ctx.obj = Workspace(root, config)


@scm_workspace.command(context_settings={"ignore_unknown_options": True})
@click.argument("source_spec", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
def configure(workspace: Workspace, source_spec: tuple[str, ...]) -> None:
    """
    Clone SOURCE_SPEC into the (empty) workspace.

    SOURCE_SPEC is "<url> [options]", for example:

      scm-workspace configure http://host/svn/repo -T trunk --branches branches
    """
    url, *options = source_spec
    workspace.configure(f"{url} {shlex.join(options)}".strip())
    click.echo(f"Configured {workspace.root} ({workspace.scm_type()})")


@scm_workspace.command()
@click.pass_obj
def clear(workspace: Workspace) -> None:
    """Remove everything inside the workspace directory."""
    workspace.clear()
    click.echo(f"Cleared {workspace.root}")


@scm_workspace.command()
@click.argument("branch")
@click.pass_obj
def checkout(workspace: Workspace, branch: str) -> None:
    """Check out BRANCH (git: also reset to origin/BRANCH)."""
    workspace.checkout(branch)
    click.echo(f"On branch {workspace.current_branch_name()}")


@scm_workspace.command()
@click.argument("tag")
@click.pass_obj
def move(workspace: Workspace, tag: str) -> None:
    """Hard-reset the current branch to TAG (git only)."""
    workspace.move(tag)
    click.echo(f"HEAD is now at {workspace.current_commit_key()}")


@scm_workspace.command()
@click.pass_obj
def fetch(workspace: Workspace) -> None:
    """Fetch remote changes without touching the working tree."""
    workspace.fetch()


@scm_workspace.command()
@click.pass_obj
def status(workspace: Workspace) -> None:
    """Show how far the checkout is behind its upstream."""
    click.echo(workspace.status())


@scm_workspace.command()
@click.option("--json", "json_output", is_flag=True, help="JSON output")
@click.pass_obj
def info(workspace: Workspace, json_output: bool) -> None:
    """
    Show backend, url, branch, commit key, branches and tags.

    Non-mutating. Prints "not configured" for an empty workspace.
    """
    commit = workspace.commit_info()
    if commit is None:
        if json_output:
            click.echo(json.dumps({"root": str(workspace.root), "configured": False}))
        else:
            click.echo(f"{workspace.root}: not configured")
        return

    data = {
        "root": str(workspace.root),
        "configured": True,
        **asdict(commit),
        "current_tags": workspace.current_tag_names() or [],
        "branches": workspace.branch_names() or [],
        "tags": workspace.tag_names() or [],
    }

    if json_output:
        click.echo(json.dumps(data, indent=2, sort_keys=True))
        return

    click.echo(f"Root:         {data['root']}")
    click.echo(f"Backend:      {data['backend_kind']}")
    click.echo(f"URL:          {data['url']}")
    click.echo(f"Branch:       {data['branch']}")
    click.echo(f"Commit:       {data['commit_key']}")
    click.echo(f"Current tags: {', '.join(data['current_tags']) or '-'}")
    click.echo(f"Branches:     {', '.join(data['branches']) or '-'}")
    click.echo(f"Tags:         {', '.join(data['tags']) or '-'}")


def main() -> None:
    scm_workspace()


if __name__ == "__main__":
    main()
