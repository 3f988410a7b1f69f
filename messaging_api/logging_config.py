"""Console logging for the ``messaging_api`` package loggers."""

from __future__ import annotations

import logging
from typing import Optional

from messaging_api.config import get_settings

PACKAGE_LOGGER = "messaging_api"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Send ``messaging_api.*`` records to stderr at ``level`` (default ``LOG_LEVEL``).

    Calling it again only updates the level; the handler is attached once.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    log_level = (level or get_settings().log_level).upper()
    logger.setLevel(getattr(logging, log_level, logging.INFO))

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    # Suppress noisy HTTP client logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return logger
