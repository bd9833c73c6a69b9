"""Command: database initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shipctl.commands._base import ShipCommand

if TYPE_CHECKING:
    from shipctl.commands._context import AppContext

_INIT_EXAMPLES = """\
  shipctl init
  shipctl init --no-seed
  shipctl --config ./ops/shipctl.toml init"""


@click.command("init", cls=ShipCommand, examples=_INIT_EXAMPLES)
@click.option("--no-seed", is_flag=True, help="Do not insert the default pricing config.")
@click.pass_obj
def init_cmd(app: AppContext, no_seed: bool) -> None:
    """Create the database, stamp its schema version, seed pricing."""
    from shipctl.services.init import InitService

    seed = app.settings.pricing.seed_on_init and not no_seed
    app.emit(InitService(app.store).init_project(seed_pricing=seed))
