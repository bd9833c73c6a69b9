"""Price formula and pricing configuration model.

Formula::

    price = base_price + weight * price_per_kg
            + (0 if office delivery else address_delivery_fee)

Rounded half-up to two decimal places once, on the final sum.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pydantic import BaseModel

TWO_PLACES = Decimal("0.01")

CONFIG_FIELDS: tuple[str, ...] = ("base_price", "price_per_kg", "address_delivery_fee")


def round2(value: Decimal) -> Decimal:
    """Round to two decimal places, half-up."""
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def to_decimal(value: object) -> Decimal | None:
    """Coerce *value* to a finite Decimal, or None if it is not a number.

    Floats go through ``str`` so ``2.75`` stays ``Decimal("2.75")``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(value)  # type: ignore[arg-type]
    except (InvalidOperation, TypeError, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


class PricingConfig(BaseModel):
    """One version of the pricing parameters.

    Rows are append-only; exactly one is ``active`` at a time.
    """

    model_config = {"frozen": True}

    id: int | None = None
    base_price: Decimal
    price_per_kg: Decimal
    address_delivery_fee: Decimal
    active: bool = True
    created_at: str | None = None
    updated_at: str | None = None


def calculate_price(
    config: PricingConfig,
    weight: Decimal,
    *,
    is_office_delivery: bool,
) -> Decimal:
    """Apply the price formula to *weight* under *config*."""
    total = config.base_price + weight * config.price_per_kg
    if not is_office_delivery:
        total += config.address_delivery_fee
    return round2(total)


@dataclass(frozen=True)
class ConfigIssue:
    """First problem found in a set of pricing inputs."""

    field: str
    reason: str


def validate_config_values(
    values: dict[str, object],
) -> tuple[dict[str, Decimal], ConfigIssue | None]:
    """Check that every pricing field is present, numeric and non-negative.

    Returns the normalized values (scale 2) and the first issue found,
    checked in :data:`CONFIG_FIELDS` order.
    """
    normalized: dict[str, Decimal] = {}
    for name in CONFIG_FIELDS:
        raw = values.get(name)
        if raw is None:
            return normalized, ConfigIssue(name, "is required")
        amount = to_decimal(raw)
        if amount is None:
            return normalized, ConfigIssue(name, "must be a number")
        if amount < 0:
            return normalized, ConfigIssue(name, "must be non-negative")
        normalized[name] = round2(amount)
    return normalized, None
