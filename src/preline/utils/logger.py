"""Minimal logging utilities for preline.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from preline.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Entering include")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "preline." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'preline.mymodule'
    """
    if not (name == "preline" or name.startswith("preline.")):
        name = f"preline.{name}"
    return logging.getLogger(name)
