"""Integration tests against a real container runtime.

These tests pull and run the ClickHouse and carbon-clickhouse images.

Usage:
    pytest tests/integration/test_docker.py --run-docker
"""

import shutil
import socket
import subprocess
import time
from collections.abc import Iterator
from pathlib import Path

import pytest

from cch_fixture import CarbonClickhouseFixture, FixtureSpec, FixtureState

pytestmark = pytest.mark.docker

CLICKHOUSE_CONTAINER = "clickhouse-cch-fixture-test"
CLICKHOUSE_IMAGE = "clickhouse/clickhouse-server:23.8"
CARBON_CLICKHOUSE_VERSION = "v0.11.4"


@pytest.fixture(scope="module")
def docker() -> str:
    """Check that docker is available and return the CLI name."""
    docker_path = shutil.which("docker")
    if docker_path is None:
        raise RuntimeError("'docker' is missing or not available in PATH.")
    return "docker"


@pytest.fixture(scope="module")
def clickhouse(docker: str) -> Iterator[str]:
    """Run a ClickHouse container for carbon-clickhouse to link to."""
    subprocess.run([docker, "rm", "-f", CLICKHOUSE_CONTAINER], capture_output=True)
    subprocess.run(
        [docker, "run", "-d", "--name", CLICKHOUSE_CONTAINER, CLICKHOUSE_IMAGE],
        capture_output=True,
        check=True,
    )
    try:
        yield f"http://{CLICKHOUSE_CONTAINER}:8123"
    finally:
        subprocess.run([docker, "rm", "-f", CLICKHOUSE_CONTAINER], capture_output=True)


def _wait_for_port(address: str, timeout: float = 30) -> None:
    host, port = address.rsplit(":", 1)
    deadline = time.time() + timeout
    while time.time() < deadline:
        try:
            with socket.create_connection((host, int(port)), timeout=1):
                return
        except OSError:
            time.sleep(0.5)
    raise TimeoutError(f"{address} did not accept connections within {timeout}s")


CONTAINER_TEMPLATE = """\
# published on {{ CCH_ADDR }}
[upload.graphite]
type = "points"
table = "graphite"
url = "{{ CLICKHOUSE_URL }}/"

[tcp]
listen = ":2003"
enabled = true
"""


def test_fixture_lifecycle(docker: str, clickhouse: str, tmp_path: Path):
    (tmp_path / "cch.conf.tpl").write_text(CONTAINER_TEMPLATE, encoding="utf-8")
    fixture = CarbonClickhouseFixture(
        FixtureSpec(version=CARBON_CLICKHOUSE_VERSION, docker=docker, template="cch.conf.tpl", tz="UTC"),
    )

    with fixture.session(tmp_path, clickhouse, CLICKHOUSE_CONTAINER) as cch:
        assert cch.state == FixtureState.RUNNING
        _wait_for_port(cch.address)
        scratch_dir = cch.scratch_dir

    assert fixture.container == ""
    assert not scratch_dir.exists()
