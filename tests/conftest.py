"""Shared pytest fixtures and test helpers for shipctl tests."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy import insert
from sqlalchemy.engine import Engine

from shipctl.config.settings import ShipSettings
from shipctl.infrastructure.database.engine import init_database
from shipctl.infrastructure.database.schema import companies, customers, employees, offices
from shipctl.infrastructure.store import Store

NOW = "2024-01-01T00:00:00.000000+00:00"


@dataclass(frozen=True)
class Directory:
    """Ids of the seeded back-office rows."""

    company: int
    office: int
    other_office: int
    alice: int
    bob: int
    carol: int
    clerk: int  # works at ``office``
    courier: int  # no office


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SHIPCTL_* environment out of the tests."""
    monkeypatch.delenv("SHIPCTL_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Iterator[None]:
    """``-v`` turns telemetry on for the whole thread; turn it back off."""
    yield
    from shipctl.services.telemetry import disable_telemetry

    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project directory (the database lives under ``.shipctl/``)."""
    return tmp_path


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path / "test.db")
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def settings(project_root: Path) -> ShipSettings:
    return ShipSettings.from_cli(project_root=project_root)


@pytest.fixture
def store(settings: ShipSettings) -> Iterator[Store]:
    """Store over a fresh database in the temp project root."""
    s = Store(settings)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def directory(store: Store) -> Directory:
    """Seed one company with two offices, three customers and two employees."""
    return seed_directory(store.engine)


@pytest.fixture
def priced_store(store: Store) -> Store:
    """Store with the reference pricing config 5.00 / 2.00 / 10.00 active."""
    from shipctl.services.pricing import PricingService

    result = PricingService(store).update_config("5.00", "2.00", "10.00")
    assert result.ok, result.error
    return store


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def seed_directory(engine: Engine) -> Directory:
    """Insert the standard directory rows and return their ids."""

    def _insert(conn: Any, table: Any, **values: Any) -> int:
        result = conn.execute(insert(table).values(created_at=NOW, **values))
        return int(result.inserted_primary_key[0])

    with engine.begin() as conn:
        company = _insert(
            conn, companies, name="Acme Logistics", registration_number="BG123", address="HQ"
        )
        office = _insert(
            conn,
            offices,
            company_id=company,
            name="Central",
            address="1 Main St",
            city="Sofia",
            country="BG",
        )
        other_office = _insert(
            conn,
            offices,
            company_id=company,
            name="North",
            address="9 Hill Rd",
            city="Ruse",
            country="BG",
        )
        alice = _insert(conn, customers, name="Alice", address="12 Vitosha Blvd")
        bob = _insert(conn, customers, name="Bob")
        carol = _insert(conn, customers, name="Carol")
        clerk = _insert(
            conn,
            employees,
            company_id=company,
            office_id=office,
            name="Clerk",
            employee_type="office_staff",
            hire_date="2020-01-01",
            salary=Decimal("1500.00"),
        )
        courier = _insert(
            conn,
            employees,
            company_id=company,
            office_id=None,
            name="Courier",
            employee_type="courier",
            hire_date="2021-06-01",
            salary=Decimal("1200.00"),
        )
    return Directory(company, office, other_office, alice, bob, carol, clerk, courier)


def register(store: Store, d: Directory, weight: Any = "5.00", **kwargs: Any) -> dict[str, Any]:
    """Register an Alice -> Bob shipment via ShipmentService, asserting success.

    Delivers to ``d.office`` unless *address* or *office_id* is given.
    """
    from shipctl.services.shipment import ShipmentService

    if "address" not in kwargs and "office_id" not in kwargs:
        kwargs["office_id"] = d.office
    sender = kwargs.pop("sender_id", d.alice)
    recipient = kwargs.pop("recipient_id", d.bob)
    employee = kwargs.pop("registered_by_id", d.clerk)
    result = ShipmentService(store).register(sender, recipient, employee, weight, **kwargs)
    assert result.ok, result.error
    return result.data


def move(store: Store, shipment_id: int, *statuses: str) -> dict[str, Any]:
    """Apply status transitions in order, asserting each succeeds."""
    from shipctl.services.shipment import ShipmentService

    svc = ShipmentService(store)
    data: dict[str, Any] = {}
    for status in statuses:
        result = svc.update_status(shipment_id, status)
        assert result.ok, result.error
        data = result.data
    return data


@pytest.fixture
def cli_directory(
    cli_runner: CliRunner, project_root: Path, _isolated_project: None
) -> Directory:
    """Run ``shipctl init`` in the temp project, then seed the directory tables."""
    from shipctl.cli import cli

    result = cli_runner.invoke(cli, ["init"])
    assert result.exit_code == 0, result.output
    engine = init_database(project_root / ".shipctl" / "shipctl.db")
    try:
        return seed_directory(engine)
    finally:
        engine.dispose()
