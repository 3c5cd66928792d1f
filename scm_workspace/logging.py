"""Logging configuration."""

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "scm_workspace"
HANDLER_NAME = "scm_workspace.stderr"
LOG_FORMAT = "%(name)s: %(levelname)s: %(message)s"


def setup_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Configure the scm_workspace logger for CLI use.

    Logs go to stderr, not mixed with command output (info --json). Only the
    package logger is touched, so an embedding application keeps its own
    root configuration. Calling it again replaces the handler.

    Args:
        verbose: If True, log at DEBUG level (every git command); otherwise WARNING.
        stream: Destination (defaults to sys.stderr)

    Returns:
        The package logger
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    for handler in list(package_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    return package_logger
