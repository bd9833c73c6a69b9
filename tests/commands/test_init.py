"""Tests for the init command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from shipctl.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestInitCommand:
    def test_creates_database(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["init"])
        assert result.exit_code == 0, result.output
        assert (project_root / ".shipctl" / "shipctl.db").is_file()
        assert "init_project" in result.output

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "init"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["revision"] == "001_baseline"
        assert data["data"]["pricing_seeded"] is True

    def test_no_seed(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init", "--no-seed"])
        result = cli_runner.invoke(cli, ["--json", "pricing", "show"])
        assert result.exit_code == 1
        assert "NO_ACTIVE_CONFIG" in result.output

    def test_rerun_keeps_pricing(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["init"])
        cli_runner.invoke(
            cli, ["pricing", "set", "--base", "7", "--per-kg", "1", "--address-fee", "3"]
        )
        result = cli_runner.invoke(cli, ["--json", "init"])
        assert json.loads(result.output)["data"]["pricing_seeded"] is False
        show = json.loads(cli_runner.invoke(cli, ["--json", "pricing", "show"]).output)
        assert show["data"]["base_price"] == "7.00"

    def test_seed_values_from_config(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "shipctl.toml").write_text("[pricing]\nbase_price = 4\n")
        cli_runner.invoke(cli, ["init"])
        show = json.loads(cli_runner.invoke(cli, ["--json", "pricing", "show"]).output)
        assert show["data"]["base_price"] == "4.00"
        assert show["data"]["price_per_kg"] == "2.00"

    def test_seed_disabled_in_config(self, cli_runner: CliRunner, project_root: Path) -> None:
        (project_root / "shipctl.toml").write_text("[pricing]\nseed_on_init = false\n")
        result = cli_runner.invoke(cli, ["--json", "init"])
        assert json.loads(result.output)["data"]["pricing_seeded"] is False
