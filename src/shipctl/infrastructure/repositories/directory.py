"""Read-only lookups into the back-office directory tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Table, select

from shipctl.infrastructure.database.schema import customers, employees, offices, shipments

if TYPE_CHECKING:
    from sqlalchemy import Connection

ENTITY_TABLES: dict[str, Table] = {
    "customer": customers,
    "employee": employees,
    "office": offices,
    "shipment": shipments,
}


class DirectoryRepository:
    """Existence checks and single-column lookups by id."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def exists(self, entity: str, entity_id: int) -> bool:
        """True if a row of *entity* (``customer``, ``office``, ...) has *entity_id*.

        Raises:
            KeyError: If *entity* is not a known entity name.
        """
        table = ENTITY_TABLES[entity]
        row = self._conn.execute(select(table.c.id).where(table.c.id == entity_id)).first()
        return row is not None

    def employee_office_id(self, employee_id: int) -> int | None:
        """The office an employee works at (None for couriers or unknown ids)."""
        row = self._conn.execute(
            select(employees.c.office_id).where(employees.c.id == employee_id)
        ).first()
        return row.office_id if row is not None else None
