"""Logging setup with rich console output.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
``setup_logging`` once to attach a RichHandler to the package logger.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# Shared console for CLI output and log records
console = Console()

PACKAGE_LOGGER = "readwise_sync"


def setup_logging(debug: bool = False, show_time: bool = False) -> logging.Logger:
    """Configure the package logger.

    Args:
        debug: Lower the level to DEBUG (per-file write traces)
        show_time: Show timestamps in log output

    Returns:
        The configured package logger
    """
    level = "DEBUG" if debug else "INFO"
    # Allow environment variable to override; unknown names are ignored
    env_level = os.getenv("LOG_LEVEL", "").upper()
    if isinstance(logging.getLevelName(env_level), int):
        level = env_level

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Re-running setup replaces the handler instead of stacking another
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    rich_handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    logger.addHandler(rich_handler)

    # Keep propagation on so pytest's caplog sees records
    logger.propagate = True

    return logger
