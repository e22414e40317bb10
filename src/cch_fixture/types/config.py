"""Settings for the carbon-clickhouse fixture.

Environment variables can override defaults using the CCH_FIXTURE_ prefix.

Example environment variables:
    CCH_FIXTURE_DOCKER=podman
    CCH_FIXTURE_IMAGE=registry.local/carbon-clickhouse
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class FixtureSettings(BaseSettings):
    """Well-known values shared by every fixture instance."""

    model_config = SettingsConfigDict(env_prefix="CCH_FIXTURE_")

    docker: str = "docker"
    """Container runtime executable used when FixtureSpec leaves it empty."""

    image: str = "lomik/carbon-clickhouse"
    """Image name used when FixtureSpec leaves it empty."""

    container_name: str = "carbon-clickhouse-gch-test"
    """Fixed container name. Only one fixture with this name can be live at a time."""

    config_file_name: str = "carbon-clickhouse.conf"
    """Name of the rendered config file inside the scratch directory."""

    container_config_dir: str = "/etc/carbon-clickhouse"
    """Path the scratch directory is bind-mounted to inside the container."""

    container_port: int = 2003
    """carbon-clickhouse receiver port inside the container."""

    bind_host: str = "127.0.0.1"
    """Host the reserved address is bound to."""


@lru_cache
def get_settings() -> FixtureSettings:
    """Get fixture settings (cached)."""
    return FixtureSettings()


__all__ = [
    "FixtureSettings",
    "get_settings",
]
