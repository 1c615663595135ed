"""
Diagnostic logging for the shelltools commands.

Tool results are written to stdout by the CLI layer. Everything logged here
goes to stderr through a rich handler, optionally copied to a log file, so
a pipeline such as ``myfind . | myxargs wc`` never sees log lines.
"""

import logging
from typing import Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "shelltools"

LEVELS: Dict[str, int] = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(threadName)s %(name)s: %(message)s"


def _stderr_handler(verbose: bool) -> RichHandler:
    # File names and timestamps only help when chasing a problem.
    return RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        markup=False,
        show_time=verbose,
        show_path=verbose,
    )


def _file_handler(log_file: str) -> logging.Handler:
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))
    return handler


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Point the ``shelltools`` logger at stderr (and ``log_file``, if given).

    ``verbosity`` is one of ``quiet``, ``normal`` or ``verbose`` and picks
    ERROR, WARNING or DEBUG. Calling this again replaces the handlers from
    the previous call, so each command run starts from a clean setup.
    The file copy records the worker thread, since archiving and counting
    log from pool threads.

    Raises:
        KeyError: If ``verbosity`` is not a known level
    """
    level = LEVELS[verbosity]
    logger = logging.getLogger(ROOT_LOGGER)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    logger.addHandler(_stderr_handler(verbosity == "verbose"))
    if log_file:
        logger.addHandler(_file_handler(log_file))
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger below ``shelltools``; ``counter`` and ``shelltools.counter`` are the same."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
