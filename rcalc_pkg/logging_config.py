"""Logging setup for rcalc.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
``setup_logging`` once with the ``--log-level``/``--log-file`` flags.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import LOG_FORMAT, LOG_LEVEL

_ROOT_LOGGER_NAME = "rcalc_pkg"


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the package logger.

    Args:
        level: Level name ("DEBUG", "INFO", ...). Defaults to config.LOG_LEVEL.
        log_file: Optional path; when given, records go to that file instead of stderr.
    """
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    logger.setLevel(getattr(logging, (level or LOG_LEVEL).upper(), logging.WARNING))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    if not name.startswith(_ROOT_LOGGER_NAME):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
