"""AppContext: the object every subcommand receives via ``pass_obj``.

Built once by the root group. It owns logging setup, the lazily opened
Store, and the mapping of a ServiceResult onto stdout/stderr and the
process exit code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from shipctl.config.logging import configure_logging
from shipctl.output.formatters import OutputSettings, format_result
from shipctl.services.telemetry import enable_telemetry

if TYPE_CHECKING:
    from shipctl.config.settings import ShipSettings
    from shipctl.infrastructure.store import Store
    from shipctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AppContext:
    """Per-invocation state shared by all commands.

    The Store is opened on first access, so ``--help``, ``--version`` and
    ``--examples`` never create a database file.
    """

    def __init__(self, settings: ShipSettings) -> None:
        self.settings = settings
        self.output = OutputSettings(
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
            list_limit=settings.reports.list_limit,
        )
        self._store: Store | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def store(self) -> Store:
        if self._store is None:
            from shipctl.infrastructure.store import Store

            self._store = Store(self.settings)
        return self._store

    def close(self) -> None:
        """Dispose of the Store's engine, if one was opened."""
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; a failed result goes to stderr and exits 1.

        Warnings of a successful result go to stderr unless ``--json`` is
        on, in which case they are already part of the payload.
        """
        text = format_result(result, settings=self.output)
        if not result.ok:
            code = result.error.code if result.error else "?"
            logger.debug("%s failed with %s", result.op, code)
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if self.output.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
