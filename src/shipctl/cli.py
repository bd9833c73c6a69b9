"""Entry point: the ``shipctl`` root group.

Global flags are folded into :class:`ShipSettings` once per invocation;
subcommands receive the resulting :class:`AppContext` via ``pass_obj``.
"""

from __future__ import annotations

from typing import Any

import click
from pydantic import ValidationError

from shipctl import __version__
from shipctl.commands import register_commands
from shipctl.commands._context import AppContext
from shipctl.config.settings import ShipSettings


def _load_settings(config_path: str | None, db_path: str | None, **flags: Any) -> ShipSettings:
    if db_path:
        # Merged into the [database] section from the config file.
        flags["database"] = {"path": db_path}
    try:
        return ShipSettings.from_cli(config_path=config_path, **flags)
    except ValidationError as exc:
        lines = [f"  {'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()]
        raise click.ClickException("Invalid configuration:\n" + "\n".join(lines)) from exc


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="shipctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Print ids only.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and call timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Use this shipctl.toml.")
@click.option("--db", "db_path", default=None, help="Override the database file path.")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, db_path: str | None, **flags: bool) -> None:
    """shipctl: shipment lifecycle, pricing and revenue reports."""
    app = AppContext(_load_settings(config_path, db_path, **flags))
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
