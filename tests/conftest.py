"""Pytest configuration for all tests."""

import shutil
import stat
from collections.abc import Sequence
from pathlib import Path

import pytest

from cch_fixture.types import CommandResult, FixtureSettings

CONFIG_TEMPLATE = """\
[common]
metric-prefix = "carbon.agents.{host}"

[clickhouse]
url = "{{ CLICKHOUSE_URL }}/?max_query_size=2097152"

[tcp]
listen = "{{ CCH_ADDR }}"
enabled = true
"""

FAKE_RUNTIME = """\
#!/bin/sh
printf '%s\\n' "$*" >> "$FAKE_RUNTIME_LOG"
if [ -n "$FAKE_RUNTIME_OUTPUT" ]; then
    echo "$FAKE_RUNTIME_OUTPUT" >&2
fi
exit "${FAKE_RUNTIME_EXIT:-0}"
"""


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "docker: marks tests that require a real container runtime")


def pytest_addoption(parser):
    """Add custom CLI options."""
    parser.addoption(
        "--run-docker",
        action="store_true",
        default=False,
        help="Run tests that start real containers (requires docker)",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--run-docker"):
        return
    skip_docker = pytest.mark.skip(reason="needs --run-docker")
    for item in items:
        if "docker" in item.keywords:
            item.add_marker(skip_docker)


class FakeBackend:
    """Container backend that records commands instead of running them.

    Args:
        results: Maps a runtime sub-command ("run", "stop", "rm") to
            (returncode, output). Sub-commands not listed succeed with no output.
    """

    def __init__(self, results: dict[str, tuple[int, str]] | None = None) -> None:
        self.results = results or {}
        self.calls: list[list[str]] = []

    def run(self, args: Sequence[str]) -> CommandResult:
        self.calls.append(list(args))
        returncode, output = self.results.get(args[0], (0, ""))
        return CommandResult(args=("docker", *args), returncode=returncode, output=output)

    def commands(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def settings() -> FixtureSettings:
    """Default settings, independent of CCH_FIXTURE_* variables in the environment."""
    return FixtureSettings(
        docker="docker",
        image="lomik/carbon-clickhouse",
        container_name="carbon-clickhouse-gch-test",
    )


@pytest.fixture
def test_dir(tmp_path: Path) -> Path:
    """Test base directory holding a valid config template at ``cch.conf.tpl``."""
    base = tmp_path / "tests"
    base.mkdir()
    (base / "cch.conf.tpl").write_text(CONFIG_TEMPLATE, encoding="utf-8")
    return base


@pytest.fixture
def fake_runtime(tmp_path: Path, monkeypatch) -> Path:
    """Executable standing in for the docker CLI.

    Appends its arguments to the file named by FAKE_RUNTIME_LOG, writes
    FAKE_RUNTIME_OUTPUT to stderr and exits with FAKE_RUNTIME_EXIT (default 0).
    """
    if shutil.which("sh") is None:
        pytest.skip("'sh' is not available")
    script = tmp_path / "fake-docker"
    script.write_text(FAKE_RUNTIME, encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    log = tmp_path / "fake-docker.log"
    log.touch()
    monkeypatch.setenv("FAKE_RUNTIME_LOG", str(log))
    monkeypatch.delenv("FAKE_RUNTIME_EXIT", raising=False)
    monkeypatch.delenv("FAKE_RUNTIME_OUTPUT", raising=False)
    return script


@pytest.fixture
def fake_runtime_log(fake_runtime: Path) -> Path:
    return fake_runtime.parent / "fake-docker.log"
