#!/usr/bin/env python3
"""Logging configuration using loguru for seqtools.

Log lines always go to stderr: stdout carries sequence data and tabular
results that are meant to be piped into the next command.
"""

from pathlib import Path
from typing import Literal

from loguru import logger
from rich.console import Console
from rich.logging import RichHandler

# Plain layout for the optional log file, the terminal gets rich's own.
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]}:{function}:{line} - {message}"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def setup_logging(level: LogLevel = "WARNING", log_file: str | Path | None = None) -> None:
    """Route loguru records to a stderr console and, optionally, a file.

    Any previously installed sinks are dropped, so calling this once per
    command invocation never duplicates lines.

    Args:
        level: Minimum level shown on the console.
        log_file: Also write DEBUG and above to this file.
    """
    logger.remove()
    logger.configure(extra={"name": "seqtools"})

    # Identifiers may contain '[', so messages are never parsed as markup.
    logger.add(
        RichHandler(console=Console(stderr=True), markup=False, show_time=False, show_path=False),
        format="{message}",
        level=level,
    )

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(str(log_file), format=FILE_FORMAT, level="DEBUG")


def get_logger(name: str | None = None):
    """Return the loguru logger, bound to ``name`` when given."""
    if name:
        return logger.bind(name=name)
    return logger
