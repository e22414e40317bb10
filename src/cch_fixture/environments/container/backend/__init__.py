"""Container backend abstraction for the carbon-clickhouse fixture.

This package provides a Protocol for container backends and a CLI implementation
that works with docker and docker-compatible runtimes (e.g., Podman).
"""

from .cli import CliBackend, build_remove_args, build_run_args, build_stop_args
from .protocol import ContainerBackend


def get_default_backend(binary: str = "docker") -> ContainerBackend:
    """Get a CLI backend for the given runtime binary."""
    return CliBackend(binary)


__all__ = [
    "CliBackend",
    "ContainerBackend",
    "build_remove_args",
    "build_run_args",
    "build_stop_args",
    "get_default_backend",
]
