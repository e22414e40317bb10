"""Exceptions raised by the carbon-clickhouse fixture."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class FixtureError(Exception):
    """Base exception for fixture errors."""


class FixtureValidationError(FixtureError):
    """A required spec field is missing. No resources were touched."""


class ResourceAllocationError(FixtureError):
    """The address or the scratch directory could not be allocated."""


class ConfigTemplateError(FixtureError):
    """The config template could not be located, parsed, rendered or written.

    Attributes:
        stage: One of ``locate``, ``parse``, ``render`` or ``write``.
        template_path: Path of the template that failed.
    """

    def __init__(self, stage: str, template_path: str, message: str) -> None:
        super().__init__(f"config template {stage} failed for {template_path}: {message}")
        self.stage = stage
        self.template_path = template_path


class ContainerRuntimeError(FixtureError):
    """The container runtime exited with a non-zero status.

    Attributes:
        command: Full command line that was run.
        returncode: Exit code of the runtime.
        output: Combined stdout and stderr, verbatim.
    """

    def __init__(self, command: Sequence[str], returncode: int, output: str) -> None:
        super().__init__(f"{' '.join(command)} exited with status {returncode}: {output.strip()}")
        self.command = tuple(command)
        self.returncode = returncode
        self.output = output


__all__ = [
    "ConfigTemplateError",
    "ContainerRuntimeError",
    "FixtureError",
    "FixtureValidationError",
    "ResourceAllocationError",
]
