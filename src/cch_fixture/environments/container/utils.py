"""Utility functions for fixture resources.

This module provides low-level helpers for reserving a local address and
managing the scratch directory that holds the rendered config.
"""

from __future__ import annotations

import shutil
import socket
import tempfile
from pathlib import Path

from cch_fixture.core.utils import logger
from cch_fixture.exceptions import ResourceAllocationError
from cch_fixture.types.config import get_settings


def find_free_address(host: str = "") -> str:
    """Find an available TCP port and return it as ``host:port``.

    Uses the OS to allocate a free port by binding to port 0,
    which lets the OS choose an available port. The port is released
    before returning, so another process may still claim it.

    Args:
        host: Host to bind. Defaults to ``FixtureSettings.bind_host`` when empty.
            IPv6 literals (e.g. ``::1``) are bound over IPv6.

    Returns:
        The reserved address, e.g. ``"127.0.0.1:39241"`` or ``"[::1]:39241"``.

    Raises:
        ResourceAllocationError: If no port could be bound.
    """
    host = (host or get_settings().bind_host).strip("[]")
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    try:
        with socket.socket(family, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((host, 0))
            port = s.getsockname()[1]
    except OSError as e:
        raise ResourceAllocationError(f"Failed to reserve a free port on {host}: {e}") from e
    return format_address(host, port)


def format_address(host: str, port: int) -> str:
    """Join host and port, bracketing IPv6 literals (``[::1]:2003``)."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def create_scratch_dir(prefix: str = "carbon-clickhouse") -> Path:
    """Create a private temporary directory.

    Raises:
        ResourceAllocationError: If the directory could not be created.
    """
    try:
        return Path(tempfile.mkdtemp(prefix=prefix))
    except OSError as e:
        raise ResourceAllocationError(f"Failed to create scratch directory: {e}") from e


def remove_scratch_dir(path: Path) -> None:
    """Recursively remove a scratch directory, logging instead of raising on failure."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Failed to remove scratch directory {path}: {e}")
