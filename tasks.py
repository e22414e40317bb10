"""Main invoke tasks file. Use `inv --list` to see available tasks."""

from invoke import Context, task


@task(name="lint")
def lint(ctx: Context) -> None:
    """Run linting (no fixes) - for CI."""
    ctx.run("ruff check src tests tasks.py")
    ctx.run("ruff format --check src tests tasks.py")


@task(name="format")
def format_code(ctx: Context) -> None:
    """Format code using ruff - for local dev."""
    ctx.run("ruff check src tests tasks.py --fix")
    ctx.run("ruff format src tests tasks.py")


@task(
    name="test",
    help={"docker": "Also run tests that start real containers (requires docker)"},
)
def run_tests(ctx: Context, docker: bool = False) -> None:
    """Run tests."""
    cmd = "pytest"
    if docker:
        cmd += " --run-docker"
    ctx.run(cmd, pty=True)
