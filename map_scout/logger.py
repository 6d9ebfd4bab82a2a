# === FILE: map_scout/logger.py ===
"""Logging setup for **MapScout**.

All modules share one named logger::

    from map_scout.logger import logger
    logger.info("Collection started")

Diagnostics go to stderr because the CLI prints artifact JSON on stdout.
A rotating log file is attached only when ``log_file`` is given
(``--log-file`` on the command line).
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "MapScout"

_MAX_LOG_BYTES: Final[int] = 5 * 1024 * 1024
_LOG_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]


def _with_format(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Attach handlers to the ``MapScout`` logger and set its level.

    ``replace_handlers=False`` keeps handlers installed by earlier calls.
    The logger does not propagate to the root logger.
    """
    project_logger = logging.getLogger(LOGGER_NAME)
    project_logger.setLevel(level)
    if replace_handlers:
        project_logger.handlers.clear()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file), maxBytes=_MAX_LOG_BYTES, backupCount=_LOG_BACKUPS, encoding="utf-8"
            )
        )
    for handler in handlers:
        project_logger.addHandler(_with_format(handler, log_format))

    project_logger.propagate = False
    return project_logger


def init_logging(
    level: _LevelT = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Positional shortcut for :func:`configure` used by the CLI."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
