"""cch-fixture - Disposable carbon-clickhouse containers for integration tests"""

from cch_fixture.core.utils import logger
from cch_fixture.environments.container import CarbonClickhouseFixture
from cch_fixture.exceptions import (
    ConfigTemplateError,
    ContainerRuntimeError,
    FixtureError,
    FixtureValidationError,
    ResourceAllocationError,
)
from cch_fixture.types import CommandResult, FixtureSettings, FixtureSpec, FixtureState, get_settings

__all__ = [
    "CarbonClickhouseFixture",
    "CommandResult",
    "ConfigTemplateError",
    "ContainerRuntimeError",
    "FixtureError",
    "FixtureSettings",
    "FixtureSpec",
    "FixtureState",
    "FixtureValidationError",
    "ResourceAllocationError",
    "get_settings",
    "logger",
]
