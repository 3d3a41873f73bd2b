"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Expose the shared library logger and an opt-in setup helper.
Why: Libraries stay silent by default; applications decide where records go.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Final

from rich.console import Console

from .handlers import PathRichHandler

LOGGER_NAME: Final[str] = "pathkit"


def setup_logger(
    log_file: Path | None = None,
    console_level: int | str | None = None,
    file_level: int = logging.DEBUG,
    console: Console | None = None,
) -> logging.Logger:
    """Set up console and optional file output for the pathkit logger.

    Args:
        log_file: Path to the log file. Defaults to the configured ``log_file``.
        console_level: Console level. Defaults to the configured ``log_level``.
        file_level: Logging level for file output. Defaults to DEBUG.
        console: Rich console to write to. Defaults to stderr.

    Returns:
        logging.Logger: Configured logger instance.
    """
    from pathkit.config import Settings

    settings = Settings.current()
    if log_file is None:
        log_file = settings.log_file
    if console_level is None:
        console_level = settings.log_level

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console_handler = PathRichHandler(console=console or Console(stderr=True, soft_wrap=True))
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        resolved_log_file = Path(log_file).expanduser().resolve()
        os.makedirs(resolved_log_file.parent, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            resolved_log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


logger: Final[logging.Logger] = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


__all__ = ["LOGGER_NAME", "logger", "setup_logger"]
