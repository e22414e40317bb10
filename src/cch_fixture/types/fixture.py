"""Fixture-related type definitions for carbon-clickhouse test containers."""

from __future__ import annotations

import tomllib
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from cch_fixture.exceptions import FixtureValidationError

if TYPE_CHECKING:
    from .config import FixtureSettings


class FixtureState(StrEnum):
    """Lifecycle state of a fixture instance."""

    UNSTARTED = "unstarted"
    RUNNING = "running"
    STOPPED = "stopped"
    DELETED = "deleted"


class FixtureSpec(BaseModel):
    """Caller-supplied description of the carbon-clickhouse instance to run.

    Field names match the keys of a fixture table in a TOML test config.

    Attributes:
        version: Image tag to run (required).
        docker: Container runtime executable. Defaults to the settings value when empty.
        image: Image name. Defaults to the settings value when empty.
        template: Config template path, relative to the test base directory.
        tz: Optional timezone override passed to the container as ``TZ``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str = Field(default="", description="Image tag to run")
    docker: str = Field(default="", description="Container runtime executable")
    image: str = Field(default="", description="Image name")
    template: str = Field(default="", description="Config template path relative to the test directory")
    tz: str = Field(default="", description="Timezone override for the container")

    @property
    def image_ref(self) -> str:
        """Full image reference: ``<image>:<version>``."""
        return f"{self.image}:{self.version}"

    def with_defaults(self, settings: FixtureSettings) -> FixtureSpec:
        """Validate required fields and fill in runtime/image defaults.

        Raises:
            FixtureValidationError: If ``version`` is empty.
        """
        if not self.version:
            raise FixtureValidationError("version not set")
        return self.model_copy(
            update={
                "docker": self.docker or settings.docker,
                "image": self.image or settings.image,
            }
        )

    @classmethod
    def from_toml(cls, path: str | Path, table: str = "carbon_clickhouse") -> FixtureSpec:
        """Load a spec from a table of a TOML test config.

        Args:
            path: TOML file to read.
            table: Name of the table holding the fixture keys.

        Raises:
            FixtureValidationError: If the table is missing.
        """
        with Path(path).open("rb") as f:
            data = tomllib.load(f)
        if table not in data:
            raise FixtureValidationError(f"table [{table}] not found in {path}")
        return cls.model_validate(data[table])


class CommandResult(BaseModel):
    """Outcome of one container runtime invocation.

    Attributes:
        args: Full command line, runtime binary included.
        returncode: Process exit code.
        output: Combined stdout and stderr, verbatim.
    """

    model_config = ConfigDict(frozen=True)

    args: tuple[str, ...] = Field(default=(), description="Full command line")
    returncode: int = Field(default=0, description="Process exit code")
    output: str = Field(default="", description="Combined stdout and stderr")

    @property
    def ok(self) -> bool:
        return self.returncode == 0


__all__ = [
    "CommandResult",
    "FixtureSpec",
    "FixtureState",
]
