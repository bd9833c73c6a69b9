"""Command group: revenue, dashboard and listing reports."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shipctl.commands._base import ShipGroup

if TYPE_CHECKING:
    from shipctl.commands._context import AppContext


@click.group(
    cls=ShipGroup,
    examples="""\
  shipctl report dashboard
  shipctl report revenue 2024-01-01 2024-01-31
  shipctl report customer 2""",
)
def report() -> None:
    """Revenue, dashboard and shipment reports."""


@report.command(
    examples="""\
  shipctl report revenue 2024-01-01 2024-01-31
  shipctl --json report revenue 2024-03-15 2024-03-15"""
)
@click.argument("start_date")
@click.argument("end_date")
@click.pass_obj
def revenue(app: AppContext, start_date: str, end_date: str) -> None:
    """Revenue from shipments delivered between START_DATE and END_DATE (inclusive)."""
    from shipctl.services.metrics import MetricsService

    app.emit(MetricsService(app.store).revenue_report(start_date, end_date))


@report.command(examples="  shipctl report dashboard")
@click.pass_obj
def dashboard(app: AppContext) -> None:
    """Totals across all shipments."""
    from shipctl.services.metrics import MetricsService

    app.emit(MetricsService(app.store).dashboard_metrics())


@report.command(examples="  shipctl report customer 2")
@click.argument("customer_id", type=int)
@click.pass_obj
def customer(app: AppContext, customer_id: int) -> None:
    """Activity summary for one customer."""
    from shipctl.services.metrics import MetricsService

    app.emit(MetricsService(app.store).customer_metrics(customer_id))


@report.command(examples="  shipctl report employee 3")
@click.argument("employee_id", type=int)
@click.pass_obj
def employee(app: AppContext, employee_id: int) -> None:
    """Shipments registered by an employee."""
    from shipctl.services.metrics import MetricsService

    app.emit(MetricsService(app.store).shipments_by_employee(employee_id))


@report.command(examples="  shipctl report pending")
@click.pass_obj
def pending(app: AppContext) -> None:
    """Shipments not yet delivered."""
    from shipctl.services.metrics import MetricsService

    app.emit(MetricsService(app.store).pending_shipments())


@report.command(examples="  shipctl report sent 2")
@click.argument("customer_id", type=int)
@click.pass_obj
def sent(app: AppContext, customer_id: int) -> None:
    """Shipments sent by a customer."""
    from shipctl.services.metrics import MetricsService

    app.emit(MetricsService(app.store).shipments_sent_by(customer_id))


@report.command(examples="  shipctl report received 2")
@click.argument("customer_id", type=int)
@click.pass_obj
def received(app: AppContext, customer_id: int) -> None:
    """Shipments addressed to a customer."""
    from shipctl.services.metrics import MetricsService

    app.emit(MetricsService(app.store).shipments_received_by(customer_id))
