"""Shared fixtures for CLI tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from stackstore.cli import app
from stackstore.env import LEGACY_LAYOUT_ENV_VAR

if TYPE_CHECKING:
    from click.testing import Result


@pytest.fixture
def runner(monkeypatch):
    """Create a CLI test runner with the legacy override cleared."""
    monkeypatch.delenv(LEGACY_LAYOUT_ENV_VAR, raising=False)
    monkeypatch.delenv("STACKSTORE_URL", raising=False)
    return CliRunner()


@pytest.fixture
def legacy_dir(tmp_path):
    """A pre-existing store directory without a metadata record."""
    path = tmp_path / "legacy"
    (path / ".stackstore" / "stacks").mkdir(parents=True)
    (path / ".stackstore" / "stacks" / "dev.json").write_text("{}")
    return path


def invoke(runner: CliRunner, args: list[str], url: str | None = None, **kwargs) -> "Result":
    """Invoke CLI with ``--url`` injected before the subcommand."""
    if url:
        args = ["--url", url] + args
    return runner.invoke(app, args, catch_exceptions=False, **kwargs)
