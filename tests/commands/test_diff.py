"""Tests for the diff CLI command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from cmdsync.cli import cli
from cmdsync.infrastructure.memory import InMemoryRemoteStore
from tests.conftest import cmd


@pytest.mark.usefixtures("project_dir")
class TestDiffCommand:
    def test_reports_pending_changes(
        self, cli_runner: CliRunner, patched_store: InMemoryRemoteStore
    ) -> None:
        patched_store.seed(cmd("old"))
        result = cli_runner.invoke(cli, ["diff"])
        assert result.exit_code == 0
        assert "+ ping" in result.stdout
        assert "- old" in result.stdout
        assert [c.name for c in patched_store.commands()] == ["old"]

    def test_in_sync(self, cli_runner: CliRunner, patched_store: InMemoryRemoteStore) -> None:
        patched_store.seed(cmd("ping", "Replies with Pong!"))
        result = cli_runner.invoke(cli, ["diff"])
        assert result.exit_code == 0
        assert "Commands are in sync." in result.stdout

    def test_update_marker(self, cli_runner: CliRunner, patched_store: InMemoryRemoteStore) -> None:
        patched_store.seed(cmd("ping", "Old text"))
        result = cli_runner.invoke(cli, ["diff"])
        assert "~ ping" in result.stdout

    def test_json_output(self, cli_runner: CliRunner, patched_store: InMemoryRemoteStore) -> None:
        result = cli_runner.invoke(cli, ["--json", "diff"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["op"] == "diff"
        assert data["data"]["create"] == ["ping"]
        assert data["data"]["in_sync"] is False
        assert patched_store.calls == [("fetch", None)]

    def test_remote_failure_exits_1(
        self, cli_runner: CliRunner, patched_store: InMemoryRemoteStore
    ) -> None:
        patched_store.fail_fetch(ConnectionError("gateway down"))
        result = cli_runner.invoke(cli, ["diff"])
        assert result.exit_code == 1
        assert "gateway down" in result.stderr
