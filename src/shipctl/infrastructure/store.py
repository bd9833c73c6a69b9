"""Store: repository access with explicit transaction boundaries.

The Store is the single dependency injected into every service. It owns
the SQLAlchemy engine and hands out two kinds of units of work:

- :meth:`Store.transaction`: a write transaction opened with
  ``BEGIN IMMEDIATE``. The SQLite write lock is taken before the first
  read, so a read-modify-write inside the block cannot interleave with
  another writer. Commits on success, rolls back on any exception.
- :meth:`Store.snapshot`: a deferred read transaction. In WAL mode it
  sees one consistent snapshot for its whole duration and never blocks
  writers.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

from shipctl.infrastructure.database.engine import BEGIN_OPTION, init_database
from shipctl.infrastructure.repositories import (
    DirectoryRepository,
    PricingRepository,
    ShipmentRepository,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from shipctl.config.settings import ShipSettings

logger = logging.getLogger(__name__)


@dataclass
class StoreTransaction:
    """Active unit of work: one connection plus repositories bound to it."""

    conn: Connection

    @cached_property
    def shipments(self) -> ShipmentRepository:
        return ShipmentRepository(self.conn)

    @cached_property
    def pricing(self) -> PricingRepository:
        return PricingRepository(self.conn)

    @cached_property
    def directory(self) -> DirectoryRepository:
        return DirectoryRepository(self.conn)


class Store:
    """Repository encapsulating database access for the shipctl core.

    Constructed once per CLI invocation from :class:`ShipSettings` and
    kept on the Click context. Services receive the Store via their
    :class:`BaseService` constructor.
    """

    def __init__(self, settings: ShipSettings) -> None:
        self._settings = settings
        db = settings.database
        self._engine: Engine = init_database(
            settings.db_path,
            busy_timeout=db.busy_timeout,
            echo=db.echo,
        )

    @property
    def db_path(self) -> Path:
        return self._settings.db_path

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> ShipSettings:
        return self._settings

    def close(self) -> None:
        """Dispose of pooled connections."""
        self._engine.dispose()

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Serialized write transaction.

        Usage::

            with store.transaction() as txn:
                shipment = txn.shipments.get(shipment_id)
                txn.shipments.update(shipment_id, {...})
                # Both commit on success, both roll back on failure.
        """
        with self._engine.connect() as conn:
            conn.execution_options(**{BEGIN_OPTION: "IMMEDIATE"})
            with conn.begin():
                yield StoreTransaction(conn=conn)

    @contextmanager
    def snapshot(self) -> Iterator[StoreTransaction]:
        """Read-only unit of work over one consistent snapshot."""
        with self._engine.connect() as conn:
            with conn.begin():
                yield StoreTransaction(conn=conn)
