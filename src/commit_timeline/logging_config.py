"""
Logging configuration for commit-timeline.

Log records go to stderr through rich so they never mix with a chart
printed on stdout.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def verbosity_from_flags(verbose: bool = False, quiet: bool = False) -> str:
    """Map the -v/-q flags onto a verbosity name; quiet wins."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Install a rich stderr handler (and optionally a plain file handler).

    Safe to call again once settings are known; earlier handlers are
    replaced.

    Args:
        verbosity: quiet, normal or verbose
        log_file: Optional file path that log records are appended to

    Returns:
        The commit_timeline package logger
    """
    level = LEVELS.get(verbosity, logging.WARNING)
    detailed = level == logging.DEBUG

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            markup=False,
            show_time=detailed,
            show_path=detailed,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers, force=True)

    logger = logging.getLogger("commit_timeline")
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the commit_timeline namespace.

    Args:
        name: Module name (e.g., 'commit_timeline.temporal.binning').
              If None, returns the package logger.
    """
    if name is None:
        return logging.getLogger("commit_timeline")

    if not name.startswith("commit_timeline"):
        name = f"commit_timeline.{name}"

    return logging.getLogger(name)
