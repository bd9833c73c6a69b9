"""Shipment persistence: row mapping, writes, and aggregate queries."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, or_, select, update

from shipctl.domain.destination import make_destination
from shipctl.domain.shipment import Shipment
from shipctl.infrastructure.database.schema import shipments

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, Connection, Row

ZERO = Decimal("0.00")


def row_to_shipment(row: Row[Any]) -> Shipment:
    """Map a ``shipments`` row to the domain model."""
    return Shipment(
        id=row.id,
        sender_id=row.sender_id,
        recipient_id=row.recipient_id,
        registered_by_id=row.registered_by_id,
        origin_office_id=row.origin_office_id,
        destination=make_destination(row.delivery_address, row.delivery_office_id),
        weight=row.weight,
        price=row.price,
        status=row.status,
        registered_at=row.registered_at,
        delivered_at=row.delivered_at,
        updated_at=row.updated_at,
    )


class ShipmentRepository:
    """Encapsulates SQL over the ``shipments`` table for one connection.

    The caller owns the transaction; nothing here commits.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    # ------------------------------------------------------------------
    # Single-row access
    # ------------------------------------------------------------------

    def get(self, shipment_id: int) -> Shipment | None:
        row = self._conn.execute(select(shipments).where(shipments.c.id == shipment_id)).first()
        return row_to_shipment(row) if row is not None else None

    def insert(self, values: dict[str, Any]) -> int:
        """Insert a shipment row and return its new id."""
        result = self._conn.execute(insert(shipments).values(**values))
        pk = result.inserted_primary_key
        assert pk is not None
        return int(pk[0])

    def update(self, shipment_id: int, values: dict[str, Any]) -> None:
        self._conn.execute(update(shipments).where(shipments.c.id == shipment_id).values(**values))

    def compare_and_set_status(
        self,
        shipment_id: int,
        *,
        expected: str,
        values: dict[str, Any],
    ) -> bool:
        """Write *values* only if the row still has status *expected*.

        Returns False when another writer changed the status first.
        """
        result = self._conn.execute(
            update(shipments)
            .where(shipments.c.id == shipment_id, shipments.c.status == expected)
            .values(**values)
        )
        return result.rowcount == 1

    def delete(self, shipment_id: int) -> bool:
        result = self._conn.execute(delete(shipments).where(shipments.c.id == shipment_id))
        return result.rowcount == 1

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def find(
        self,
        *,
        status: str | None = None,
        exclude_status: str | None = None,
        sender_id: int | None = None,
        recipient_id: int | None = None,
        party_id: int | None = None,
        registered_by_id: int | None = None,
    ) -> list[Shipment]:
        """List shipments in id order, filtered by any combination of fields.

        *party_id* matches a customer on either side of the shipment.
        """
        stmt = select(shipments).order_by(shipments.c.id)
        for clause in _filters(
            status=status,
            exclude_status=exclude_status,
            sender_id=sender_id,
            recipient_id=recipient_id,
            party_id=party_id,
            registered_by_id=registered_by_id,
        ):
            stmt = stmt.where(clause)
        return [row_to_shipment(row) for row in self._conn.execute(stmt)]

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def count(
        self,
        *,
        status: str | None = None,
        sender_id: int | None = None,
        recipient_id: int | None = None,
    ) -> int:
        stmt = select(func.count(shipments.c.id))
        for clause in _filters(status=status, sender_id=sender_id, recipient_id=recipient_id):
            stmt = stmt.where(clause)
        return int(self._conn.execute(stmt).scalar_one() or 0)

    def sum_price(
        self,
        *,
        status: str | None = None,
        sender_id: int | None = None,
        delivered_from: str | None = None,
        delivered_to: str | None = None,
    ) -> Decimal:
        """Sum ``price`` over matching rows; ``0.00`` when nothing matches."""
        stmt = select(func.coalesce(func.sum(shipments.c.price), 0))
        for clause in _filters(status=status, sender_id=sender_id):
            stmt = stmt.where(clause)
        stmt = _delivered_window(stmt, delivered_from, delivered_to)
        value = self._conn.execute(stmt).scalar_one()
        return value if value is not None else ZERO

    def count_delivered_between(self, delivered_from: str, delivered_to: str) -> int:
        stmt = select(func.count(shipments.c.id)).where(shipments.c.status == "delivered")
        stmt = _delivered_window(stmt, delivered_from, delivered_to)
        return int(self._conn.execute(stmt).scalar_one() or 0)


def _filters(
    *,
    status: str | None = None,
    exclude_status: str | None = None,
    sender_id: int | None = None,
    recipient_id: int | None = None,
    party_id: int | None = None,
    registered_by_id: int | None = None,
) -> list[ColumnElement[bool]]:
    clauses: list[ColumnElement[bool]] = []
    if status is not None:
        clauses.append(shipments.c.status == status)
    if exclude_status is not None:
        clauses.append(shipments.c.status != exclude_status)
    if sender_id is not None:
        clauses.append(shipments.c.sender_id == sender_id)
    if recipient_id is not None:
        clauses.append(shipments.c.recipient_id == recipient_id)
    if party_id is not None:
        clauses.append(or_(shipments.c.sender_id == party_id, shipments.c.recipient_id == party_id))
    if registered_by_id is not None:
        clauses.append(shipments.c.registered_by_id == registered_by_id)
    return clauses


def _delivered_window(stmt: Any, start: str | None, end: str | None) -> Any:
    """Restrict to ``start <= delivered_at <= end`` (ISO strings, inclusive)."""
    if start is not None:
        stmt = stmt.where(shipments.c.delivered_at >= start)
    if end is not None:
        stmt = stmt.where(shipments.c.delivered_at <= end)
    return stmt
