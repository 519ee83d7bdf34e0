"""Logging setup."""

import sys
from typing import Optional

from loguru import logger


def configure_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Replace loguru's default handler with a stderr sink and an optional file sink."""
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=level)
    if log_file:
        logger.add(log_file, rotation="10 MB", level="DEBUG")
