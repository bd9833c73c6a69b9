"""Command group: pricing configuration and quotes."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shipctl.commands._base import ShipGroup

if TYPE_CHECKING:
    from shipctl.commands._context import AppContext


@click.group(
    cls=ShipGroup,
    examples="""\
  shipctl pricing show
  shipctl pricing quote 2.75 --office
  shipctl pricing set --base 5 --per-kg 2 --address-fee 10""",
)
def pricing() -> None:
    """Inspect and change the active pricing configuration."""


@pricing.command(examples="  shipctl pricing show\n  shipctl --json pricing show")
@click.pass_obj
def show(app: AppContext) -> None:
    """Show the active pricing configuration."""
    from shipctl.services.pricing import PricingService

    app.emit(PricingService(app.store).get_active_config())


@pricing.command(
    examples="""\
  shipctl pricing quote 5
  shipctl pricing quote 2.75 --office"""
)
@click.argument("weight")
@click.option(
    "--office/--address",
    "office_delivery",
    default=False,
    help="Quote office pickup (default: address delivery).",
)
@click.pass_obj
def quote(app: AppContext, weight: str, office_delivery: bool) -> None:
    """Quote the price for WEIGHT kg under the active configuration."""
    from shipctl.services.pricing import PricingService

    app.emit(PricingService(app.store).calculate_price(weight, office_delivery))


@pricing.command(
    "set",
    examples="""\
  shipctl pricing set --base 5 --per-kg 2 --address-fee 10
  shipctl pricing set --base 6.50 --per-kg 2.25 --address-fee 12""",
)
@click.option("--base", "base_price", required=True, help="Base price per shipment.")
@click.option("--per-kg", "price_per_kg", required=True, help="Price per kilogram.")
@click.option(
    "--address-fee", "address_delivery_fee", required=True, help="Surcharge for address delivery."
)
@click.pass_obj
def set_cmd(
    app: AppContext, base_price: str, price_per_kg: str, address_delivery_fee: str
) -> None:
    """Activate a new pricing configuration."""
    from shipctl.services.pricing import PricingService

    app.emit(
        PricingService(app.store).update_config(base_price, price_per_kg, address_delivery_fee)
    )


@pricing.command(examples="  shipctl pricing history")
@click.pass_obj
def history(app: AppContext) -> None:
    """List every pricing configuration, newest first."""
    from shipctl.services.pricing import PricingService

    app.emit(PricingService(app.store).config_history())
