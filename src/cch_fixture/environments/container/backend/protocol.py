"""Container backend protocol definition.

Defines the interface the fixture uses to invoke a container runtime
(Docker, Podman, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Sequence

    from cch_fixture.types.fixture import CommandResult


class ContainerBackend(Protocol):
    """Protocol for container backend implementations.

    A backend runs one runtime command synchronously and reports its exit
    status and combined output. It never raises for a non-zero exit and
    never parses the output.
    """

    def run(self, args: Sequence[str]) -> CommandResult:
        """Run the runtime with the given arguments.

        Args:
            args: Arguments without the runtime binary (e.g. ``["stop", "name"]``).

        Returns:
            CommandResult with the full command line, exit code and combined output.
        """
        ...


__all__ = ["ContainerBackend"]
