"""
Loguru sink setup for the speakflow CLI.

Library modules only call ``logger``; the sink is configured once by the
entry point so embedding applications keep control of their own output.
"""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}"


def configure_logging(level: str = "INFO") -> None:
    """Replace the default loguru sink with the CLI format."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
