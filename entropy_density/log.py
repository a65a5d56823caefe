"""Logging setup for the command line.

Library modules log through ``loguru``'s shared ``logger`` and never add
sinks themselves.  Importing the package disables its messages; the CLI
calls :func:`configure_logging` once to re-enable them.
"""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}:{function}:{line}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "WARNING") -> None:
    """Enable package messages and send them to a single stderr sink at *level*."""
    logger.enable("entropy_density")
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT, colorize=None)
