"""Logging setup: rich console handler plus an optional log file."""

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "favsync"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    *,
    verbose: bool = False,
    log_file: Optional[str | Path] = None,
    colored: bool = True,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Configure the ``favsync`` logger.

    Args:
        verbose: Log at DEBUG instead of INFO.
        log_file: Optional file that receives a plain-text copy of the log.
        colored: Enable colored console output.
        console: Rich Console to log to (defaults to stderr).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = console or Console(stderr=True, no_color=not colored)
    rich_handler = RichHandler(console=console, show_path=verbose, rich_tracebacks=True, markup=False)
    rich_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(rich_handler)

    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    return logger
