"""Fixture manager for the carbon-clickhouse test container.

This module provides the CarbonClickhouseFixture class for starting, stopping,
deleting and cleaning up a disposable carbon-clickhouse container wired to a
running ClickHouse container.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

from cch_fixture.core.utils import logger
from cch_fixture.exceptions import ContainerRuntimeError, FixtureError
from cch_fixture.types.config import get_settings
from cch_fixture.types.fixture import CommandResult, FixtureState

from .backend import build_remove_args, build_run_args, build_stop_args, get_default_backend
from .template import render_config_template, write_config_file
from .utils import create_scratch_dir, find_free_address, remove_scratch_dir

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from cch_fixture.types.config import FixtureSettings
    from cch_fixture.types.fixture import FixtureSpec

    from .backend import ContainerBackend


class CarbonClickhouseFixture:
    """Manages the lifecycle of one carbon-clickhouse container.

    The container name is fixed (see ``FixtureSettings.container_name``), so
    only one fixture of this kind can be live on a host at a time. Starting a
    second one while the first is running fails in the runtime, not here.

    Operations are meant to be called sequentially from one test's setup and
    teardown. Runtime calls block until the subprocess exits.

    Args:
        spec: Fixture spec. Validated and defaulted on ``start``.
        backend: Optional container backend. If None, a CLI backend for
            ``spec.docker`` is created on ``start``.
        settings: Optional settings override. If None, uses ``get_settings()``.
        allocate_address: Optional free-address allocator taking a host.

    Example:
        >>> fixture = CarbonClickhouseFixture(FixtureSpec(version="0.11.4", template="cch.conf.tpl"))
        >>> fixture.start("tests/e2e", "http://clickhouse:8123", "clickhouse-gch-test")
        >>> print(f"Send metrics to: {fixture.address}")
        >>> fixture.stop(delete=True)
    """

    def __init__(
        self,
        spec: FixtureSpec,
        *,
        backend: ContainerBackend | None = None,
        settings: FixtureSettings | None = None,
        allocate_address: Callable[[str], str] | None = None,
    ) -> None:
        self.spec = spec
        self.settings = settings or get_settings()
        self.backend = backend
        self._allocate_address = allocate_address or find_free_address

        self._address = ""
        self._container = ""
        self._scratch_dir: Path | None = None
        self._state = FixtureState.UNSTARTED

    @property
    def address(self) -> str:
        """Reserved ``host:port`` the container publishes its receiver on."""
        return self._address

    @property
    def container(self) -> str:
        """Name of the tracked container, empty if none was created."""
        return self._container

    @property
    def scratch_dir(self) -> Path | None:
        """Scratch directory holding the rendered config, if not cleaned up."""
        return self._scratch_dir

    @property
    def state(self) -> FixtureState:
        """Lifecycle state: unstarted, running, stopped or deleted."""
        return self._state

    def start(self, test_dir: str | Path, clickhouse_url: str, clickhouse_container: str) -> CommandResult:
        """Allocate resources, render the config and launch the container.

        A scratch directory left by a previous start is removed first. Any
        failure before the launch removes the new scratch directory. A failed
        launch keeps it, so the rendered config can be inspected.

        Args:
            test_dir: Base directory ``FixtureSpec.template`` is relative to.
            clickhouse_url: URL of the ClickHouse instance, passed to the template.
            clickhouse_container: Name of the ClickHouse container to link to.

        Returns:
            CommandResult of the ``run`` invocation.

        Raises:
            FixtureValidationError: If ``FixtureSpec.version`` is empty.
            ResourceAllocationError: If the address or scratch directory could not be allocated.
            ConfigTemplateError: If the template could not be located, parsed, rendered or written.
            ContainerRuntimeError: If the runtime exits non-zero.
        """
        spec = self.spec.with_defaults(self.settings)
        self.spec = spec
        if self.backend is None:
            self.backend = get_default_backend(spec.docker)
        self.cleanup()

        self._address = self._allocate_address(self.settings.bind_host)
        self._scratch_dir = create_scratch_dir()
        logger.debug(f"Reserved {self._address}, scratch directory {self._scratch_dir}")

        try:
            config = render_config_template(
                test_dir,
                spec.template,
                CLICKHOUSE_URL=clickhouse_url,
                CCH_ADDR=self._address,
            )
            write_config_file(self._scratch_dir, self.settings.config_file_name, config, template_path=spec.template)
        except FixtureError:
            self.cleanup()
            raise

        self._container = self.settings.container_name
        args = build_run_args(
            name=self._container,
            address=self._address,
            container_port=self.settings.container_port,
            config_dir=str(self._scratch_dir),
            container_config_dir=self.settings.container_config_dir,
            link=clickhouse_container,
            image=spec.image_ref,
            tz=spec.tz,
        )
        logger.info(f"Starting container: {self._container} (image: {spec.image_ref}, address: {self._address})")
        result = self.backend.run(args)
        if not result.ok:
            raise ContainerRuntimeError(result.args, result.returncode, result.output)

        self._state = FixtureState.RUNNING
        logger.info("Container started successfully")
        return result

    def stop(self, delete: bool = False) -> CommandResult:
        """Stop the container, optionally deleting it afterwards.

        Does nothing if no container is tracked.

        Args:
            delete: If True and the stop succeeded, also delete the container
                and return the delete result instead.

        Raises:
            ContainerRuntimeError: If stop (or the chained delete) fails.
        """
        if not self._container:
            return CommandResult()

        logger.info(f"Stopping container: {self._container}")
        result = self._run(build_stop_args(self._container))
        if not result.ok:
            raise ContainerRuntimeError(result.args, result.returncode, result.output)

        self._state = FixtureState.STOPPED
        if delete:
            return self.delete()
        return result

    def delete(self) -> CommandResult:
        """Remove the container and clean up the scratch directory.

        Does nothing if no container is tracked. Cleanup runs whether or not
        the removal succeeds; the container stays tracked on failure so the
        call can be retried.

        Raises:
            ContainerRuntimeError: If the runtime fails to remove the container.
        """
        if not self._container:
            return CommandResult()

        logger.info(f"Deleting container: {self._container}")
        try:
            result = self._run(build_remove_args(self._container))
            if not result.ok:
                raise ContainerRuntimeError(result.args, result.returncode, result.output)
            self._container = ""
            self._state = FixtureState.DELETED
        finally:
            self.cleanup()
        return result

    def cleanup(self) -> None:
        """Remove the scratch directory if one is tracked. Never raises."""
        if self._scratch_dir is not None:
            remove_scratch_dir(self._scratch_dir)
            self._scratch_dir = None

    @contextlib.contextmanager
    def session(
        self, test_dir: str | Path, clickhouse_url: str, clickhouse_container: str
    ) -> Iterator[CarbonClickhouseFixture]:
        """Context manager that starts the fixture and tears it down on exit.

        Usage:
            with fixture.session(test_dir, "http://clickhouse:8123", "clickhouse") as cch:
                send_metrics(cch.address)
        """
        try:
            self.start(test_dir, clickhouse_url, clickhouse_container)
            yield self
        finally:
            try:
                self.stop(delete=True)
            except ContainerRuntimeError as e:
                logger.warning(f"Failed to tear down container {self._container}: {e}")
            self.cleanup()

    def _run(self, args: list[str]) -> CommandResult:
        if self.backend is None:
            self.backend = get_default_backend(self.spec.docker or self.settings.docker)
        return self.backend.run(args)


__all__ = ["CarbonClickhouseFixture"]
