"""PricingService: price quotes and the versioned pricing configuration."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from shipctl.domain.pricing import CONFIG_FIELDS, calculate_price, validate_config_values
from shipctl.domain.shipment import normalize_weight
from shipctl.services._helpers import now_iso
from shipctl.services.base import BaseService
from shipctl.services.result import ErrorCode, ServiceResult
from shipctl.services.telemetry import traced

logger = logging.getLogger(__name__)

NO_ACTIVE_CONFIG_MESSAGE = "No active pricing configuration"


def no_active_config(op: str) -> ServiceResult:
    return ServiceResult.failure(op, ErrorCode.NO_ACTIVE_CONFIG, NO_ACTIVE_CONFIG_MESSAGE)


class PricingService(BaseService):
    """Computes prices and manages the append-only config history."""

    @traced
    def calculate_price(self, weight: Any, is_office_delivery: bool) -> ServiceResult:
        """Quote a price for *weight* kg under the active config."""
        op = "calculate_price"
        normalized, message = normalize_weight(weight)
        if normalized is None:
            return ServiceResult.failure(op, ErrorCode.INVALID_WEIGHT, str(message))

        with self._store.snapshot() as txn:
            config = txn.pricing.active()
        if config is None:
            return no_active_config(op)

        price = calculate_price(config, normalized, is_office_delivery=is_office_delivery)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "weight": normalized,
                "office_delivery": is_office_delivery,
                "price": price,
                "config_id": config.id,
            },
        )

    @traced
    def get_active_config(self) -> ServiceResult:
        op = "get_active_config"
        with self._store.snapshot() as txn:
            config = txn.pricing.active()
        if config is None:
            return no_active_config(op)
        return ServiceResult(ok=True, op=op, data=config.model_dump())

    @traced
    def update_config(
        self,
        base_price: Any,
        price_per_kg: Any,
        address_delivery_fee: Any,
    ) -> ServiceResult:
        """Replace the active config with a new version.

        The previous active row is deactivated and the new one inserted in
        a single write transaction, so readers see either the old or the
        new config and never zero or two.
        """
        op = "update_config"
        values, issue = validate_config_values(
            {
                "base_price": base_price,
                "price_per_kg": price_per_kg,
                "address_delivery_fee": address_delivery_fee,
            }
        )
        if issue is not None:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_CONFIG,
                f"{issue.field} {issue.reason}",
                field=issue.field,
                reason=issue.reason,
            )

        with self._store.transaction() as txn:
            previous = txn.pricing.active()
            config = txn.pricing.replace_active(values, now_iso())

        logger.info(
            "Pricing config %s activated (replaces %s)",
            config.id,
            previous.id if previous is not None else "none",
        )
        data = config.model_dump()
        data["previous_id"] = previous.id if previous is not None else None
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def config_history(self) -> ServiceResult:
        """Every config ever created, newest first."""
        with self._store.snapshot() as txn:
            configs = txn.pricing.history()
        return ServiceResult(
            ok=True,
            op="config_history",
            data={"items": [c.model_dump() for c in configs], "count": len(configs)},
        )

    def seed_default_config(self, defaults: dict[str, Decimal] | None = None) -> ServiceResult:
        """Insert the configured default pricing if no config exists yet.

        Idempotent: once any config row exists (active or not) this does
        nothing and reports ``seeded: False``.
        """
        op = "seed_default_config"
        if defaults is None:
            seed = self._store.settings.pricing
            defaults = {name: getattr(seed, name) for name in CONFIG_FIELDS}

        values, issue = validate_config_values(dict(defaults))
        if issue is not None:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_CONFIG,
                f"{issue.field} {issue.reason}",
                field=issue.field,
                reason=issue.reason,
            )

        with self._store.transaction() as txn:
            if txn.pricing.count() > 0:
                return ServiceResult(ok=True, op=op, data={"seeded": False})
            config = txn.pricing.replace_active(values, now_iso())

        logger.info("Seeded default pricing config %s", config.id)
        return ServiceResult(ok=True, op=op, data={"seeded": True, **config.model_dump()})
