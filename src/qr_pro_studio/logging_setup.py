"""Logging configuration for the desktop entry point."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Send log records to stderr at ``level``.

    Unknown level names fall back to ``INFO`` instead of failing start-up.
    """

    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    else:
        resolved = level

    logging.basicConfig(level=resolved, format=LOG_FORMAT)
    # urllib3 logs every connection at DEBUG.
    logging.getLogger("urllib3").setLevel(max(resolved, logging.INFO))


__all__ = ["LOG_FORMAT", "configure_logging"]
