"""Logging utilities for cch_fixture package."""

import logging
import sys

# Create global logger instance
logger = logging.getLogger("cch-fixture")


def setup_cch_fixture_logging(level: int = logging.INFO) -> None:
    """
    Setup logging with a clean format for the cch_fixture package.

    Args:
        level: Logging level (default: INFO)
    """
    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    logging_handler = logging.StreamHandler(sys.stdout)
    logging_formatter = logging.Formatter("[cch-fixture] [%(levelname)s] %(message)s")

    logging_handler.setFormatter(logging_formatter)
    logger.addHandler(logging_handler)
    logger.setLevel(level)
    logger.propagate = False  # Don't propagate to root logger


__all__ = [
    "logger",
    "setup_cch_fixture_logging",
]
