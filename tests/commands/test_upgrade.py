"""Tests for the upgrade command."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from shipctl.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestUpgradeCommand:
    def test_check_after_init(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        result = cli_runner.invoke(cli, ["--json", "upgrade", "--check"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["data"]
        assert data["pending_count"] == 0
        assert data["current"] == data["head"] == "001_baseline"

    def test_apply_is_noop_when_current(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        result = cli_runner.invoke(cli, ["upgrade"])
        assert result.exit_code == 0, result.output
        assert "already up to date" in result.output

    def test_unstamped_database_is_adopted(self, cli_runner: CliRunner) -> None:
        # Any command creates the tables without stamping them.
        cli_runner.invoke(cli, ["shipment", "list"])
        check = json.loads(cli_runner.invoke(cli, ["--json", "upgrade", "--check"]).output)
        assert check["data"]["current"] is None
        result = cli_runner.invoke(cli, ["--json", "upgrade"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["data"]["current"] == "001_baseline"
