"""Workspace probes."""

from scm_workspace.probes.repo import has_git_dir, has_git_svn_dir, is_empty_dir
from scm_workspace.probes.tools import CommandResult, run_command, run_command_output
