"""Click classes carrying per-command usage examples.

``examples=`` text is kept off ``--help`` and printed by an eager
``--examples`` flag instead, which exits before any callback runs (so
the database is never opened).
"""

from __future__ import annotations

from typing import Any

import click


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    examples = getattr(ctx.command, "examples", None) or ""
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(examples.rstrip())
    ctx.exit(0)


def _examples_option() -> click.Option:
    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_show_examples,
        help="Show usage examples and exit.",
    )


class ShipCommand(click.Command):
    """Command accepting ``examples=``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option())


class ShipGroup(click.Group):
    """Group accepting ``examples=``; its subcommands are ShipCommands."""

    command_class = ShipCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(_examples_option())
