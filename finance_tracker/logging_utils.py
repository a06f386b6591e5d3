"""Mini README: Application-wide logging helpers for Finance Tracker.

Structure:
    * get_logger - factory returning module loggers with baseline configuration.
    * configure_root_logger - installs the shared handler and sets the level.

Usage:
    Modules call ``get_logger(__name__)``. ``create_application`` calls
    ``configure_root_logger`` with the configured level, so the level also
    applies inside uvicorn reload workers that build the app themselves. The
    handler is installed exactly once so reloads in development do not
    duplicate output; later calls only adjust the level.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger with a readable, timestamped formatter."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
