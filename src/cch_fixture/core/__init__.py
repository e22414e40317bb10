"""Core modules for cch_fixture."""

from .utils.logging import setup_cch_fixture_logging

__all__ = [
    "setup_cch_fixture_logging",
]
