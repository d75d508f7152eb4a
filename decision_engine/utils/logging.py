"""Logging setup for the decision engine and its dashboard."""

import logging
import os
import sys
from typing import Optional, Union

from decision_engine.config.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level {level!r}")
    return resolved


def _has_file_handler(logger: logging.Logger, path: str) -> bool:
    return any(
        isinstance(h, logging.FileHandler) and h.baseFilename == path
        for h in logger.handlers
    )


def setup_logger(
    name: str = "decision_engine",
    level: Optional[Union[str, int]] = None,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the package logger.

    Library modules log through ``logging.getLogger(__name__)``, so configuring
    ``decision_engine`` once covers the simulation and analytics modules.
    Calling this again only updates the level and attaches a file handler for
    a path not yet logged to; the console handler is added once.

    Args:
        name: Logger name
        level: Level name or number (default settings.log_level)
        log_file: Also append records to this file (default settings.log_file)

    Returns:
        Configured logger

    Raises:
        ValueError: If the level name is unknown
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(settings.log_level if level is None else level))
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    # FileHandler subclasses StreamHandler, so match the exact type
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    log_file = settings.log_file if log_file is None else log_file
    if log_file and not _has_file_handler(logger, os.path.abspath(log_file)):
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
