"""Logging configuration for kanban_mvp.

Headless commands (--export, --import, --generate) can log to stderr.
While the board is on screen Textual owns the terminal, and anything
written to stderr corrupts the display, so the TUI only ever logs to a
file.
"""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

LOGGER_NAME = "kanban_mvp"
DEFAULT_LOG_FILENAME = "kanban.log"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Handlers installed by the last setup_logging call
_installed: list[logging.Handler] = []


def level_for(verbose: int) -> int:
    """-v and no flag log at INFO, -vv and more at DEBUG."""
    return logging.DEBUG if verbose >= 2 else logging.INFO


def tui_log_file(
    verbose: int, log_file: Path | None, data_dir: Path, ephemeral: bool = False
) -> Path | None:
    """
    Pick the log file for a TUI session.

    An explicit --log-file always wins. Otherwise -v sends the log to
    kanban.log in the data directory, except for ephemeral sessions,
    which never write to disk unless told to.
    """
    if log_file is not None:
        return log_file
    if verbose > 0 and not ephemeral:
        return data_dir / DEFAULT_LOG_FILENAME
    return None


def _reset_handlers(logger: logging.Logger) -> None:
    while _installed:
        handler = _installed.pop()
        logger.removeHandler(handler)
        handler.close()


def setup_logging(verbose: int = 0, log_file: Path | None = None, console: bool = True) -> None:
    """Configure the package logger.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG)
        log_file: Optional path to write logs to file
        console: Whether stderr is free for log output. False while the
            TUI is running.
    """
    logger = logging.getLogger(LOGGER_NAME)
    _reset_handlers(logger)

    use_console = console and verbose > 0
    if not use_console and log_file is None:
        return

    level = level_for(verbose)
    logger.setLevel(level)

    if use_console:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(stderr_handler)
        _installed.append(stderr_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
        _installed.append(file_handler)

    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info(
        "kanban_mvp starting | %s | level=%s | mode=%s",
        timestamp,
        logging.getLevelName(level),
        "headless" if console else "tui",
    )
