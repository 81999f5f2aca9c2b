"""Shared pytest fixtures for kube_console tests."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from kube_console.cli.main import app


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("KCON_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def cli_app() -> typer.Typer:
    """Return the CLI app for testing."""
    return app
