"""Logging setup for the API process and the management CLI."""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level_from_string(level: str) -> int:
    value = getattr(logging, level.upper(), None)
    if isinstance(value, int):
        return value
    return logging.INFO


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the ``app`` logger hierarchy. Safe to call more than once."""
    logger = logging.getLogger("app")
    logger.setLevel(_level_from_string(level))
    logger.handlers = []
    logger.propagate = False

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
