"""Configuration loader."""

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from scm_workspace.errors import ConfigError

DEFAULT_SVN_BRANCH_PREFIX = "branches"
DEFAULT_REVISION_LOOKUP_ATTEMPTS = 10
DEFAULT_REVISION_LOOKUP_DELAY = 0.5

logger = logging.getLogger(__name__)


@dataclass
class WorkspaceConfig:
    """
    Options passed to a Workspace at construction.

    Attributes:
        logger: Log sink for executed commands (module logger if None)
        verbose: Echo executed commands to stdout and list directories on errors
        svn_branch_prefix: Path segment hiding svn branch names ("branches")
        revision_lookup_attempts: Bound on git svn find-rev retries
        revision_lookup_delay: Seconds to wait between find-rev retries
    """

    logger: Optional[logging.Logger] = None
    verbose: bool = False
    svn_branch_prefix: str = DEFAULT_SVN_BRANCH_PREFIX
    revision_lookup_attempts: int = DEFAULT_REVISION_LOOKUP_ATTEMPTS
    revision_lookup_delay: float = DEFAULT_REVISION_LOOKUP_DELAY

    def __post_init__(self) -> None:
        if self.revision_lookup_attempts < 1:
            raise ConfigError(
                f"revision_lookup_attempts must be >=1, got {self.revision_lookup_attempts}"
            )
        if self.revision_lookup_delay < 0:
            raise ConfigError(
                f"revision_lookup_delay must be >=0, got {self.revision_lookup_delay}"
            )


def _is_truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_config_file(config_path: Path) -> dict[str, str]:
    """
    Parse INI-style config file.

    Returns:
        Dict of config values (DEFAULT keys upper-cased, others as section.key)

    Raises:
        ConfigError: If the file exists but cannot be parsed
    """
    if not config_path.exists():
        return {}

    parser = configparser.ConfigParser()
    try:
        parser.read(config_path)
    except configparser.Error as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    config = {}

    for key, value in parser["DEFAULT"].items():
        config[key.upper()] = value

    for section in parser.sections():
        for key, value in parser[section].items():
            if key in parser["DEFAULT"]:
                continue
            config[f"{section}.{key}"] = value

    return config


def get_config(
    config_path: Optional[Path] = None,
    log: Optional[logging.Logger] = None,
) -> WorkspaceConfig:
    """
    Build a WorkspaceConfig from the environment and an optional file.

    Resolves from (highest precedence first):
    1. Environment variables (SCM_WORKSPACE_*)
    2. Config file (explicit path or SCM_WORKSPACE_CONFIG)
    3. Defaults

    Args:
        config_path: INI file to read (optional)
        log: Logger to hand to the workspace (optional)

    Returns:
        WorkspaceConfig with resolved values
    """
    if config_path is None and os.environ.get("SCM_WORKSPACE_CONFIG"):
        config_path = Path(os.environ["SCM_WORKSPACE_CONFIG"])

    file_config = _parse_config_file(config_path) if config_path else {}

    verbose_str = os.environ.get("SCM_WORKSPACE_VERBOSE") or file_config.get("VERBOSE")
    verbose = _is_truthy(verbose_str) if verbose_str else False

    svn_branch_prefix = (
        os.environ.get("SCM_WORKSPACE_SVN_BRANCH_PREFIX")
        or file_config.get("SVN_BRANCH_PREFIX")
        or DEFAULT_SVN_BRANCH_PREFIX
    )

    attempts = DEFAULT_REVISION_LOOKUP_ATTEMPTS
    attempts_str = os.environ.get("SCM_WORKSPACE_REVISION_ATTEMPTS") or file_config.get(
        "REVISION_ATTEMPTS"
    )
    if attempts_str:
        try:
            attempts = int(attempts_str)
            if attempts < 1:
                logger.warning(
                    f"SCM_WORKSPACE_REVISION_ATTEMPTS must be >=1, "
                    f"using default: {DEFAULT_REVISION_LOOKUP_ATTEMPTS}"
                )
                attempts = DEFAULT_REVISION_LOOKUP_ATTEMPTS
        except ValueError:
            logger.warning(
                f"Invalid SCM_WORKSPACE_REVISION_ATTEMPTS value, "
                f"using default: {DEFAULT_REVISION_LOOKUP_ATTEMPTS}"
            )

    delay = DEFAULT_REVISION_LOOKUP_DELAY
    delay_str = os.environ.get("SCM_WORKSPACE_REVISION_DELAY") or file_config.get(
        "REVISION_DELAY"
    )
    if delay_str:
        try:
            delay = max(float(delay_str), 0.0)
        except ValueError:
            logger.warning(
                f"Invalid SCM_WORKSPACE_REVISION_DELAY value, "
                f"using default: {DEFAULT_REVISION_LOOKUP_DELAY}"
            )

    logger.debug(f"Verbose: {verbose}")
    logger.debug(f"SVN branch prefix: {svn_branch_prefix}")
    logger.debug(f"Revision lookup: {attempts} attempts, {delay}s delay")

    return WorkspaceConfig(
        logger=log,
        verbose=verbose,
        svn_branch_prefix=svn_branch_prefix,
        revision_lookup_attempts=attempts,
        revision_lookup_delay=delay,
    )
