"""Container management for the carbon-clickhouse test fixture.

This package provides utilities for running a disposable carbon-clickhouse
container next to a ClickHouse container, including starting, stopping,
deleting and cleaning up its resources.
"""

from .backend import CliBackend, ContainerBackend, get_default_backend
from .manager import CarbonClickhouseFixture
from .template import render_config_template, write_config_file
from .utils import create_scratch_dir, find_free_address, format_address, remove_scratch_dir

__all__ = [
    "CarbonClickhouseFixture",
    "CliBackend",
    "ContainerBackend",
    "create_scratch_dir",
    "find_free_address",
    "format_address",
    "get_default_backend",
    "remove_scratch_dir",
    "render_config_template",
    "write_config_file",
]
