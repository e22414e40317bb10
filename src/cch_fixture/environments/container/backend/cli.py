"""CLI backend implementation.

Uses the docker (or any docker-compatible) CLI to manage containers.
"""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

from cch_fixture.core.utils import logger
from cch_fixture.types.fixture import CommandResult

if TYPE_CHECKING:
    from collections.abc import Sequence

# Exit status reported when the runtime binary cannot be executed
COMMAND_NOT_FOUND = 127


class CliBackend:
    """Docker-compatible CLI implementation of ContainerBackend.

    Args:
        binary: Runtime executable (e.g. "docker", "podman", or a full path).
    """

    def __init__(self, binary: str = "docker") -> None:
        self.binary = binary

    def run(self, args: Sequence[str]) -> CommandResult:
        """Run the runtime and capture stdout and stderr as one stream."""
        cmd = [self.binary, *args]
        logger.debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
            )
        except OSError as e:
            return CommandResult(args=tuple(cmd), returncode=COMMAND_NOT_FOUND, output=str(e))
        return CommandResult(args=tuple(cmd), returncode=result.returncode, output=result.stdout)


def build_run_args(
    *,
    name: str,
    address: str,
    container_port: int,
    config_dir: str,
    container_config_dir: str,
    link: str,
    image: str,
    tz: str = "",
) -> list[str]:
    """Build ``run`` arguments for a detached, linked fixture container."""
    args = [
        "run",
        "-d",
        "--name",
        name,
        "-p",
        f"{address}:{container_port}",
        "-v",
        f"{config_dir}:{container_config_dir}",
        "--link",
        link,
    ]
    if tz:
        args.extend(["-e", f"TZ={tz}"])
    args.append(image)
    return args


def build_stop_args(name: str) -> list[str]:
    return ["stop", name]


def build_remove_args(name: str) -> list[str]:
    return ["rm", name]
