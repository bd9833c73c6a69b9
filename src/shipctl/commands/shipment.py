"""Command group: shipment lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shipctl.commands._base import ShipGroup
from shipctl.domain.lifecycle import ShipmentStatus

if TYPE_CHECKING:
    from shipctl.commands._context import AppContext

_STATUS_CHOICES = [s.value for s in ShipmentStatus]


@click.group(
    cls=ShipGroup,
    examples="""\
  shipctl shipment register --sender 1 --recipient 2 --employee 3 --weight 2.75 --office 1
  shipctl shipment status 7 in_transit
  shipctl shipment list --status registered""",
)
def shipment() -> None:
    """Register, edit and move shipments through their lifecycle."""


@shipment.command(
    examples="""\
  shipctl shipment register --sender 1 --recipient 2 --employee 3 --weight 5 --office 1
  shipctl shipment register -s 1 -r 2 -e 3 -w 1.5 --address "12 Vitosha Blvd, Sofia"
  shipctl --json shipment register -s 1 -r 2 -e 3 -w 10 --office 2 --origin 1"""
)
@click.option("-s", "--sender", "sender_id", type=int, required=True, help="Sender customer id.")
@click.option(
    "-r", "--recipient", "recipient_id", type=int, required=True, help="Recipient customer id."
)
@click.option(
    "-e", "--employee", "employee_id", type=int, required=True, help="Registering employee id."
)
@click.option("-w", "--weight", required=True, help="Weight in kg.")
@click.option("--address", default=None, help="Deliver to this street address.")
@click.option("--office", "office_id", type=int, default=None, help="Deliver to this office.")
@click.option(
    "--origin",
    "origin_office_id",
    type=int,
    default=None,
    help="Origin office (defaults to the employee's office).",
)
@click.pass_obj
def register(
    app: AppContext,
    sender_id: int,
    recipient_id: int,
    employee_id: int,
    weight: str,
    address: str | None,
    office_id: int | None,
    origin_office_id: int | None,
) -> None:
    """Register a new shipment and price it."""
    from shipctl.services.shipment import ShipmentService

    app.emit(
        ShipmentService(app.store).register(
            sender_id,
            recipient_id,
            employee_id,
            weight,
            address=address,
            office_id=office_id,
            origin_office_id=origin_office_id,
        )
    )


@shipment.command(
    examples="""\
  shipctl shipment status 7 in_transit
  shipctl shipment status 7 delivered
  shipctl shipment status 7 cancelled"""
)
@click.argument("shipment_id", type=int)
@click.argument("status")
@click.pass_obj
def status(app: AppContext, shipment_id: int, status: str) -> None:
    """Move a shipment to STATUS (registered, in_transit, delivered, cancelled)."""
    from shipctl.services.shipment import ShipmentService

    app.emit(ShipmentService(app.store).update_status(shipment_id, status))


@shipment.command(
    examples="""\
  shipctl shipment update 7 -s 1 -r 2 -w 3.2 --office 1
  shipctl shipment update 7 -s 1 -r 4 -w 3.2 --address "5 Main St" """
)
@click.argument("shipment_id", type=int)
@click.option("-s", "--sender", "sender_id", type=int, required=True, help="Sender customer id.")
@click.option(
    "-r", "--recipient", "recipient_id", type=int, required=True, help="Recipient customer id."
)
@click.option("-w", "--weight", required=True, help="Weight in kg.")
@click.option("--address", default=None, help="Deliver to this street address.")
@click.option("--office", "office_id", type=int, default=None, help="Deliver to this office.")
@click.pass_obj
def update(
    app: AppContext,
    shipment_id: int,
    sender_id: int,
    recipient_id: int,
    weight: str,
    address: str | None,
    office_id: int | None,
) -> None:
    """Edit a shipment that is not yet delivered or cancelled."""
    from shipctl.services.shipment import ShipmentService

    app.emit(
        ShipmentService(app.store).update(
            shipment_id,
            sender_id,
            recipient_id,
            weight,
            address=address,
            office_id=office_id,
        )
    )


@shipment.command(examples="  shipctl shipment delete 7")
@click.argument("shipment_id", type=int)
@click.pass_obj
def delete(app: AppContext, shipment_id: int) -> None:
    """Delete a shipment permanently."""
    from shipctl.services.shipment import ShipmentService

    app.emit(ShipmentService(app.store).delete(shipment_id))


@shipment.command(
    examples="""\
  shipctl shipment show 7
  shipctl --json shipment show 7"""
)
@click.argument("shipment_id", type=int)
@click.pass_obj
def show(app: AppContext, shipment_id: int) -> None:
    """Show one shipment."""
    from shipctl.services.shipment import ShipmentService

    app.emit(ShipmentService(app.store).get(shipment_id))


@shipment.command(
    "list",
    examples="""\
  shipctl shipment list
  shipctl shipment list --status in_transit
  shipctl -q shipment list --customer 2""",
)
@click.option(
    "--status",
    type=click.Choice(_STATUS_CHOICES, case_sensitive=False),
    default=None,
    help="Only shipments in this status.",
)
@click.option(
    "--customer",
    "customer_id",
    type=int,
    default=None,
    help="Only shipments this customer sent or receives.",
)
@click.pass_obj
def list_cmd(app: AppContext, status: str | None, customer_id: int | None) -> None:
    """List shipments."""
    from shipctl.services.shipment import ShipmentService

    app.emit(ShipmentService(app.store).list_shipments(status=status, customer_id=customer_id))
