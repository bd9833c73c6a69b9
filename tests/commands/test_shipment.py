"""Tests for the shipment command group."""

from __future__ import annotations

import json
from typing import Any

from click.testing import CliRunner

from shipctl.cli import cli
from tests.conftest import Directory


def _invoke_json(runner: CliRunner, *args: str) -> tuple[int, dict[str, Any]]:
    result = runner.invoke(cli, ["--json", *args])
    return result.exit_code, json.loads(result.output)


def _register(runner: CliRunner, d: Directory, *extra: str) -> dict[str, Any]:
    args = ["shipment", "register", "-s", str(d.alice), "-r", str(d.bob), "-e", str(d.clerk)]
    args += ["-w", "5", *(extra or ("--office", str(d.office)))]
    code, payload = _invoke_json(runner, *args)
    assert code == 0, payload
    return payload["data"]


class TestRegister:
    def test_office_delivery(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        data = _register(cli_runner, cli_directory)
        assert data["status"] == "registered"
        assert data["price"] == "15.00"
        assert data["delivery_office_id"] == cli_directory.office

    def test_address_delivery(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        data = _register(cli_runner, cli_directory, "--address", "5 Elm St")
        assert data["price"] == "25.00"
        assert data["delivery_address"] == "5 Elm St"

    def test_human_output(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        d = cli_directory
        result = cli_runner.invoke(
            cli,
            ["shipment", "register", "-s", str(d.alice), "-r", str(d.bob), "-e", str(d.clerk),
             "-w", "2.5", "--office", str(d.office)],
        )
        assert result.exit_code == 0, result.output
        assert "register_shipment" in result.output
        assert "price: 10.00" in result.output

    def test_both_destinations_rejected(
        self, cli_runner: CliRunner, cli_directory: Directory
    ) -> None:
        d = cli_directory
        code, payload = _invoke_json(
            cli_runner,
            "shipment", "register", "-s", str(d.alice), "-r", str(d.bob), "-e", str(d.clerk),
            "-w", "5", "--office", str(d.office), "--address", "x",
        )
        assert code == 1
        assert payload["error"]["code"] == "INVALID_DESTINATION"

    def test_bad_weight(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        d = cli_directory
        code, payload = _invoke_json(
            cli_runner,
            "shipment", "register", "-s", str(d.alice), "-r", str(d.bob), "-e", str(d.clerk),
            "-w", "heavy", "--office", str(d.office),
        )
        assert code == 1
        assert payload["error"]["code"] == "INVALID_WEIGHT"

    def test_unknown_sender(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        d = cli_directory
        code, payload = _invoke_json(
            cli_runner,
            "shipment", "register", "-s", "999", "-r", str(d.bob), "-e", str(d.clerk),
            "-w", "5", "--office", str(d.office),
        )
        assert code == 1
        assert payload["error"]["code"] == "NOT_FOUND"

    def test_quiet_prints_id(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        d = cli_directory
        result = cli_runner.invoke(
            cli,
            ["-q", "shipment", "register", "-s", str(d.alice), "-r", str(d.bob),
             "-e", str(d.clerk), "-w", "1", "--office", str(d.office)],
        )
        assert result.exit_code == 0, result.output
        assert result.output.strip().isdigit()


class TestStatus:
    def test_lifecycle(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        sid = str(_register(cli_runner, cli_directory)["id"])
        code, payload = _invoke_json(cli_runner, "shipment", "status", sid, "in_transit")
        assert code == 0
        assert payload["data"]["previous_status"] == "registered"
        code, payload = _invoke_json(cli_runner, "shipment", "status", sid, "delivered")
        assert code == 0
        assert payload["data"]["delivered_at"] is not None

    def test_illegal_transition(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        sid = str(_register(cli_runner, cli_directory)["id"])
        _invoke_json(cli_runner, "shipment", "status", sid, "cancelled")
        code, payload = _invoke_json(cli_runner, "shipment", "status", sid, "in_transit")
        assert code == 1
        assert payload["error"]["code"] == "INVALID_STATUS_TRANSITION"

    def test_unknown_status(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        sid = str(_register(cli_runner, cli_directory)["id"])
        code, payload = _invoke_json(cli_runner, "shipment", "status", sid, "lost")
        assert code == 1
        assert payload["error"]["code"] == "INVALID_STATUS"

    def test_same_status(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        sid = str(_register(cli_runner, cli_directory)["id"])
        code, payload = _invoke_json(cli_runner, "shipment", "status", sid, "registered")
        assert code == 0
        assert payload["data"]["changed"] is False


class TestUpdateDelete:
    def test_update_reprices(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        d = cli_directory
        sid = str(_register(cli_runner, d)["id"])
        code, payload = _invoke_json(
            cli_runner,
            "shipment", "update", sid, "-s", str(d.alice), "-r", str(d.carol),
            "-w", "10", "--address", "7 Oak Ave",
        )
        assert code == 0, payload
        assert payload["data"]["recipient_id"] == d.carol
        assert payload["data"]["price"] == "35.00"

    def test_update_delivered_rejected(
        self, cli_runner: CliRunner, cli_directory: Directory
    ) -> None:
        d = cli_directory
        sid = str(_register(cli_runner, d)["id"])
        _invoke_json(cli_runner, "shipment", "status", sid, "in_transit")
        _invoke_json(cli_runner, "shipment", "status", sid, "delivered")
        code, payload = _invoke_json(
            cli_runner,
            "shipment", "update", sid, "-s", str(d.alice), "-r", str(d.bob),
            "-w", "1", "--office", str(d.office),
        )
        assert code == 1
        assert payload["error"]["code"] == "CANNOT_MODIFY"

    def test_delete_then_show(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        sid = str(_register(cli_runner, cli_directory)["id"])
        code, payload = _invoke_json(cli_runner, "shipment", "delete", sid)
        assert code == 0
        assert payload["data"]["deleted"] is True
        code, payload = _invoke_json(cli_runner, "shipment", "show", sid)
        assert code == 1
        assert payload["error"]["code"] == "NOT_FOUND"


class TestShowList:
    def test_show(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        sid = _register(cli_runner, cli_directory)["id"]
        result = cli_runner.invoke(cli, ["shipment", "show", str(sid)])
        assert result.exit_code == 0, result.output
        assert f"Shipment {sid}" in result.output
        assert "next: cancelled, in_transit" in result.output

    def test_list_filters(self, cli_runner: CliRunner, cli_directory: Directory) -> None:
        d = cli_directory
        first = str(_register(cli_runner, d)["id"])
        _register(cli_runner, d)
        _invoke_json(cli_runner, "shipment", "status", first, "in_transit")

        code, payload = _invoke_json(cli_runner, "shipment", "list")
        assert payload["data"]["count"] == 2
        code, payload = _invoke_json(cli_runner, "shipment", "list", "--status", "in_transit")
        assert [i["id"] for i in payload["data"]["items"]] == [int(first)]
        code, payload = _invoke_json(cli_runner, "shipment", "list", "--customer", str(d.carol))
        assert payload["data"]["count"] == 0

    def test_list_rejects_unknown_status(
        self, cli_runner: CliRunner, cli_directory: Directory
    ) -> None:
        result = cli_runner.invoke(cli, ["shipment", "list", "--status", "lost"])
        assert result.exit_code == 2
