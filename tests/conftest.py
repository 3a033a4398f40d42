"""Shared pytest fixtures and test helpers for cmdsync tests."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Coroutine, Generator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, TypeVar

import pytest
from click.testing import CliRunner

from cmdsync.infrastructure.memory import InMemoryRemoteStore
from cmdsync.services.telemetry import _current_span, disable_telemetry

_T = TypeVar("_T")


def run(coro: Coroutine[Any, Any, _T]) -> _T:
    """Drive a coroutine to completion from a synchronous test."""
    return asyncio.run(coro)


def cmd(name: str, description: str = "desc", **fields: Any) -> dict[str, Any]:
    """Build a command payload with sensible defaults."""
    return {"name": name, "description": description, **fields}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def store() -> InMemoryRemoteStore:
    """An empty in-memory remote store that is already ready."""
    return InMemoryRemoteStore()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Keep host CMDSYNC_* variables and telemetry state out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("CMDSYNC_"):
            monkeypatch.delenv(key)
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Change CWD to a temp project root holding a default commands.toml."""
    (tmp_path / "commands.toml").write_text(
        '[[commands]]\nname = "ping"\ndescription = "Replies with Pong!"\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def patched_store(
    store: InMemoryRemoteStore, monkeypatch: pytest.MonkeyPatch
) -> InMemoryRemoteStore:
    """Route CLI commands to the in-memory store instead of Discord."""
    from cmdsync.commands._context import AppContext

    @asynccontextmanager
    async def _open_store(self: AppContext) -> AsyncIterator[InMemoryRemoteStore]:
        yield store

    monkeypatch.setattr(AppContext, "open_store", _open_store)
    return store
