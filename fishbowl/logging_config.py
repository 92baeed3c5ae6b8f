"""Logging setup for headless fishbowl runs."""

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "FISHBOWL_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"


def resolve_log_level(level: Optional[str] = None) -> int:
    """Turn ``level`` (or ``$FISHBOWL_LOG_LEVEL``, or INFO) into a logging level.

    Raises:
        ValueError: If the name is not a standard logging level
    """
    name = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").strip().upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {name!r}")
    return resolved


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure root handlers and return the ``fishbowl`` package logger."""
    resolved = resolve_log_level(level)
    logging.basicConfig(level=resolved, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    package_logger = logging.getLogger("fishbowl")
    package_logger.setLevel(resolved)
    package_logger.debug("Logging configured at %s", logging.getLevelName(resolved))
    return package_logger
