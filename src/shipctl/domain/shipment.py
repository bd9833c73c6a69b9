"""Shipment model and weight rules."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from shipctl.domain.destination import Destination
from shipctl.domain.lifecycle import ShipmentStatus
from shipctl.domain.pricing import round2, to_decimal

MAX_WEIGHT = Decimal("10000.00")


def normalize_weight(value: object) -> tuple[Decimal | None, str | None]:
    """Normalize a weight to scale 2 and check it lies in ``(0, 10000]``.

    Returns ``(weight, None)`` on success or ``(None, message)``.
    """
    raw = to_decimal(value)
    if raw is None:
        return None, "Weight is required and must be a number"
    if raw > MAX_WEIGHT:
        return None, f"Weight cannot exceed {MAX_WEIGHT.normalize():f} kg"
    # Upper bound is checked on the input before rounding.
    weight = round2(raw)
    if weight <= 0:
        return None, "Weight must be greater than 0"
    return weight, None


class Shipment(BaseModel):
    """A shipment as persisted.

    ``delivered_at`` is set if and only if ``status`` is ``delivered``.
    """

    model_config = {"frozen": True}

    id: int
    sender_id: int
    recipient_id: int
    registered_by_id: int
    origin_office_id: int | None = None
    destination: Destination
    weight: Decimal
    price: Decimal
    status: ShipmentStatus
    registered_at: str
    delivered_at: str | None = None
    updated_at: str

    def to_data(self) -> dict[str, Any]:
        """Flatten into the payload shape used in service results."""
        data = self.model_dump()
        destination = data.pop("destination")
        data["delivery_address"] = destination.get("address")
        data["delivery_office_id"] = destination.get("office_id")
        data["office_delivery"] = destination["kind"] == "office"
        return data
