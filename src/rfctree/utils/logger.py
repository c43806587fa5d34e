"""Minimal logging utilities for rfctree.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from rfctree.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Parsing document")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "rfctree." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'rfctree.mymodule'
    """
    if not (name == "rfctree" or name.startswith("rfctree.")):
        name = f"rfctree.{name}"
    return logging.getLogger(name)
