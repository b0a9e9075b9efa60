"""Loguru sink configuration for the catalog."""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} [{level}] {name}: {message}"


def configure_logging(level: str = "INFO") -> None:
    """Send log records to stderr, keeping stdout for command output."""
    logger.remove()
    logger.add(sys.stderr, format=LOG_FORMAT, level=level)
