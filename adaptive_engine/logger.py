"""Logging setup for scripts and demos embedding the engine."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "adaptive_engine"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Attach a single stderr handler to the package logger."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger
