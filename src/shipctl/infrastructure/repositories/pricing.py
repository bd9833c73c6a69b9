"""Pricing configuration persistence (append-only history)."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, insert, select, update

from shipctl.domain.pricing import PricingConfig
from shipctl.infrastructure.database.schema import pricing_configs

if TYPE_CHECKING:
    from sqlalchemy import Connection, Row


def row_to_config(row: Row[Any]) -> PricingConfig:
    return PricingConfig(
        id=row.id,
        base_price=row.base_price,
        price_per_kg=row.price_per_kg,
        address_delivery_fee=row.address_delivery_fee,
        active=bool(row.active),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class PricingRepository:
    """SQL over ``pricing_configs`` for one connection."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def active(self) -> PricingConfig | None:
        """The single active config, or None if the table has none."""
        row = self._conn.execute(
            select(pricing_configs).where(pricing_configs.c.active.is_(True))
        ).first()
        return row_to_config(row) if row is not None else None

    def history(self) -> list[PricingConfig]:
        """All configs, newest first."""
        rows = self._conn.execute(select(pricing_configs).order_by(pricing_configs.c.id.desc()))
        return [row_to_config(row) for row in rows]

    def count(self) -> int:
        return int(self._conn.execute(select(func.count(pricing_configs.c.id))).scalar_one())

    def replace_active(self, values: dict[str, Decimal], now: str) -> PricingConfig:
        """Deactivate the current config and insert *values* as the new active one.

        Both statements run on the caller's connection, so they commit or
        roll back together.
        """
        self._conn.execute(
            update(pricing_configs)
            .where(pricing_configs.c.active.is_(True))
            .values(active=False, updated_at=now)
        )
        result = self._conn.execute(
            insert(pricing_configs).values(
                **values,
                active=True,
                created_at=now,
                updated_at=now,
            )
        )
        pk = result.inserted_primary_key
        assert pk is not None
        row = self._conn.execute(
            select(pricing_configs).where(pricing_configs.c.id == pk[0])
        ).one()
        return row_to_config(row)
