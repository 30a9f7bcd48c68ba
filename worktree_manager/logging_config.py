"""Logging setup for worktree-manager.

All loggers live under the ``worktree_manager`` package logger, which is the
only one configured here; library loggers keep their own settings.

While the interactive screen is up, the terminal belongs to Textual, so
records go to a log file only. In direct mode they are printed to stderr
through rich, next to the rich console output of the CLI.
"""
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from worktree_manager.constants import APP_DIR_NAME, LOG_FILE_NAME

PACKAGE_LOGGER = "worktree_manager"
FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_log_file() -> Path:
    """Location of the log file used in TUI and debug mode."""
    return Path.home() / APP_DIR_NAME / LOG_FILE_NAME


def _file_handler(log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler.setLevel(logging.DEBUG)
    return handler


def _console_handler(level: int, debug: bool) -> logging.Handler:
    handler = RichHandler(
        console=Console(stderr=True),
        level=level,
        show_time=debug,
        show_path=debug,
        markup=False,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def setup_logging(
    verbose: bool = False,
    debug: bool = False,
    tui_mode: bool = False,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        verbose: Show INFO messages on the console in direct mode
        debug: Show DEBUG messages and also write the log file in direct mode
        tui_mode: Log to the file only; the interactive screen owns the terminal
        log_file: Override for the log file location

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    if tui_mode or debug:
        logger.addHandler(_file_handler(log_file or get_log_file()))

    if not tui_mode:
        if debug:
            level = logging.DEBUG
        elif verbose:
            level = logging.INFO
        else:
            level = logging.WARNING
        logger.addHandler(_console_handler(level, debug))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, attached under the package logger."""
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
