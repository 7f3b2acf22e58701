"""Minimal logging utilities for Sobre.

Example:
    >>> from sobre.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Linking %s", "someone@example.com")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``sobre``.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> get_logger("mymodule").name
        'sobre.mymodule'
    """
    if not (name == "sobre" or name.startswith("sobre.")):
        name = f"sobre.{name}"
    return logging.getLogger(name)
