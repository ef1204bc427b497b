"""Logging setup for applications embedding the clinic package."""
from __future__ import annotations

import logging

from .config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_HANDLER_NAME = "clinic-stream"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Attach a stream handler to the ``clinic`` logger.

    Calling it again only updates the level; no duplicate handler is added.
    """
    logger = logging.getLogger("clinic")
    if level is None:
        level = get_settings().log_level
    logger.setLevel(level)
    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
