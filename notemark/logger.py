"""Logging helpers for notemark.

Example:
    >>> from notemark.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "notemark"


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``notemark``.

    Args:
        name: Logger name (typically ``__name__``).

    Returns:
        logging.Logger: Standard library logger.

    Example:
        >>> get_logger("blocks").name
        'notemark.blocks'
    """
    if not (name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}.")):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
