"""Subcommand modules for shipctl.

Provides register_commands() which uses deferred imports to keep
``shipctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from shipctl.commands.pricing import pricing
    from shipctl.commands.report import report
    from shipctl.commands.shipment import shipment

    cli.add_command(shipment)
    cli.add_command(pricing)
    cli.add_command(report)

    # --- Standalone commands ---
    from shipctl.commands.init_cmd import init_cmd
    from shipctl.commands.upgrade import upgrade

    cli.add_command(init_cmd)
    cli.add_command(upgrade)
