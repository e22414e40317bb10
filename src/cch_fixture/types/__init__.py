"""Type definitions for cch_fixture."""

from .config import FixtureSettings, get_settings
from .fixture import CommandResult, FixtureSpec, FixtureState

__all__ = [
    "CommandResult",
    "FixtureSettings",
    "FixtureSpec",
    "FixtureState",
    "get_settings",
]
