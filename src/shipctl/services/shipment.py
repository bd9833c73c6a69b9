"""ShipmentService: registration, status transitions, edits, removal.

Pipeline for every write: VALIDATE → RESOLVE → PRICE → PERSIST → RESPOND.
Input validation runs before the write transaction opens; reference
resolution, pricing and the write share one ``BEGIN IMMEDIATE``
transaction so a failure part-way leaves nothing behind.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from shipctl.domain.destination import (
    DESTINATION_ERROR,
    AddressDestination,
    DestinationError,
    OfficeDestination,
    is_office_delivery,
    make_destination,
)
from shipctl.domain.lifecycle import (
    ShipmentStatus,
    allowed_targets,
    is_terminal,
    is_valid_transition,
    parse_status,
)
from shipctl.domain.pricing import calculate_price
from shipctl.domain.shipment import Shipment, normalize_weight
from shipctl.services._helpers import not_found, now_iso
from shipctl.services.base import BaseService
from shipctl.services.pricing import no_active_config
from shipctl.services.result import ErrorCode, ServiceResult
from shipctl.services.telemetry import traced

if TYPE_CHECKING:
    from decimal import Decimal

    from shipctl.infrastructure.store import StoreTransaction

logger = logging.getLogger(__name__)


def destination_columns(destination: AddressDestination | OfficeDestination) -> dict[str, Any]:
    """Flatten a destination into its two storage columns."""
    if isinstance(destination, OfficeDestination):
        return {"delivery_address": None, "delivery_office_id": destination.office_id}
    return {"delivery_address": destination.address, "delivery_office_id": None}


def shipment_list_data(items: list[Shipment], **filters: Any) -> dict[str, Any]:
    """Payload shape shared by every shipment listing."""
    data: dict[str, Any] = {
        "items": [s.to_data() for s in items],
        "count": len(items),
    }
    if filters:
        data["filters"] = filters
    return data


class ShipmentService(BaseService):
    """Owns creation, mutation and status transitions of shipments."""

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @traced
    def register(
        self,
        sender_id: int,
        recipient_id: int,
        registered_by_id: int,
        weight: Any,
        *,
        address: str | None = None,
        office_id: int | None = None,
        origin_office_id: int | None = None,
    ) -> ServiceResult:
        """Register a new shipment in status ``registered``.

        *origin_office_id* defaults to the registering employee's office.
        """
        op = "register_shipment"

        # ── VALIDATE ─────────────────────────────────────────────
        checked = _validate_inputs(op, weight, address, office_id)
        if isinstance(checked, ServiceResult):
            return checked
        destination, normalized = checked

        with self._store.transaction() as txn:
            # ── RESOLVE ──────────────────────────────────────────
            missing = _first_missing(
                txn,
                op,
                [
                    ("customer", sender_id),
                    ("customer", recipient_id),
                    ("employee", registered_by_id),
                    ("office", origin_office_id),
                    ("office", office_id if is_office_delivery(destination) else None),
                ],
            )
            if missing is not None:
                return missing
            if origin_office_id is None:
                origin_office_id = txn.directory.employee_office_id(registered_by_id)

            # ── PRICE ────────────────────────────────────────────
            price = _price(txn, normalized, destination)
            if price is None:
                return no_active_config(op)

            # ── PERSIST ──────────────────────────────────────────
            now = now_iso()
            shipment_id = txn.shipments.insert(
                {
                    "sender_id": sender_id,
                    "recipient_id": recipient_id,
                    "registered_by_id": registered_by_id,
                    "origin_office_id": origin_office_id,
                    **destination_columns(destination),
                    "weight": normalized,
                    "price": price,
                    "status": ShipmentStatus.REGISTERED.value,
                    "registered_at": now,
                    "delivered_at": None,
                    "updated_at": now,
                }
            )
            shipment = txn.shipments.get(shipment_id)
            assert shipment is not None

        logger.info("Registered shipment %s (price %s)", shipment.id, shipment.price)
        return ServiceResult(ok=True, op=op, data=shipment.to_data())

    @traced
    def update_status(self, shipment_id: int, status: str) -> ServiceResult:
        """Move a shipment along its lifecycle.

        Requesting the current status is a successful no-op. Entering
        ``delivered`` stamps ``delivered_at``.
        """
        op = "update_status"
        target = parse_status(status) if isinstance(status, str) else None
        if target is None:
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_STATUS,
                f"Unknown status: {status!r}",
                status=status,
                allowed=[s.value for s in ShipmentStatus],
            )

        with self._store.transaction() as txn:
            shipment = txn.shipments.get(shipment_id)
            if shipment is None:
                return not_found(op, "shipment", shipment_id)

            current = shipment.status
            if current == target:
                return ServiceResult(
                    ok=True,
                    op=op,
                    data={**shipment.to_data(), "changed": False},
                )
            if not is_valid_transition(current, target):
                return _invalid_transition(op, current, target)

            now = now_iso()
            values: dict[str, Any] = {"status": target.value, "updated_at": now}
            if target is ShipmentStatus.DELIVERED:
                values["delivered_at"] = now

            if not txn.shipments.compare_and_set_status(
                shipment_id, expected=current.value, values=values
            ):
                fresh = txn.shipments.get(shipment_id)
                if fresh is None:
                    return not_found(op, "shipment", shipment_id)
                return _invalid_transition(op, fresh.status, target)

            updated = txn.shipments.get(shipment_id)
            assert updated is not None

        logger.info("Shipment %s status %s -> %s", shipment_id, current, target)
        return ServiceResult(
            ok=True,
            op=op,
            data={**updated.to_data(), "changed": True, "previous_status": current.value},
        )

    @traced
    def update(
        self,
        shipment_id: int,
        sender_id: int,
        recipient_id: int,
        weight: Any,
        *,
        address: str | None = None,
        office_id: int | None = None,
    ) -> ServiceResult:
        """Edit parties, weight and destination of a non-terminal shipment.

        The price is recomputed from scratch under the active config.
        """
        op = "update_shipment"

        with self._store.transaction() as txn:
            shipment = txn.shipments.get(shipment_id)
            if shipment is None:
                return not_found(op, "shipment", shipment_id)
            if is_terminal(shipment.status):
                return ServiceResult.failure(
                    op,
                    ErrorCode.CANNOT_MODIFY,
                    f"Cannot modify a {shipment.status} shipment",
                    status=shipment.status.value,
                )

            checked = _validate_inputs(op, weight, address, office_id)
            if isinstance(checked, ServiceResult):
                return checked
            destination, normalized = checked

            refs: list[tuple[str, int | None]] = []
            if sender_id != shipment.sender_id:
                refs.append(("customer", sender_id))
            if recipient_id != shipment.recipient_id:
                refs.append(("customer", recipient_id))
            if is_office_delivery(destination):
                refs.append(("office", office_id))
            missing = _first_missing(txn, op, refs)
            if missing is not None:
                return missing

            price = _price(txn, normalized, destination)
            if price is None:
                return no_active_config(op)

            txn.shipments.update(
                shipment_id,
                {
                    "sender_id": sender_id,
                    "recipient_id": recipient_id,
                    **destination_columns(destination),
                    "weight": normalized,
                    "price": price,
                    "updated_at": now_iso(),
                },
            )
            updated = txn.shipments.get(shipment_id)
            assert updated is not None

        logger.info("Updated shipment %s (price %s -> %s)", shipment_id, shipment.price, price)
        return ServiceResult(ok=True, op=op, data=updated.to_data())

    @traced
    def delete(self, shipment_id: int) -> ServiceResult:
        """Hard-delete a shipment."""
        op = "delete_shipment"
        with self._store.transaction() as txn:
            if not txn.shipments.delete(shipment_id):
                return not_found(op, "shipment", shipment_id)
        logger.info("Deleted shipment %s", shipment_id)
        return ServiceResult(ok=True, op=op, data={"id": shipment_id, "deleted": True})

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @traced
    def get(self, shipment_id: int) -> ServiceResult:
        op = "get_shipment"
        with self._store.snapshot() as txn:
            shipment = txn.shipments.get(shipment_id)
        if shipment is None:
            return not_found(op, "shipment", shipment_id)
        data = shipment.to_data()
        data["allowed_transitions"] = allowed_targets(shipment.status)
        return ServiceResult(ok=True, op=op, data=data)

    @traced
    def list_shipments(
        self,
        *,
        status: str | None = None,
        customer_id: int | None = None,
    ) -> ServiceResult:
        """All shipments, optionally by status and/or a customer on either side."""
        op = "list_shipments"
        parsed: ShipmentStatus | None = None
        if status is not None:
            parsed = parse_status(status)
            if parsed is None:
                return ServiceResult.failure(
                    op,
                    ErrorCode.INVALID_STATUS,
                    f"Unknown status: {status!r}",
                    status=status,
                    allowed=[s.value for s in ShipmentStatus],
                )

        with self._store.snapshot() as txn:
            if customer_id is not None and not txn.directory.exists("customer", customer_id):
                return not_found(op, "customer", customer_id)
            items = txn.shipments.find(
                status=parsed.value if parsed is not None else None,
                party_id=customer_id,
            )

        filters = {
            k: v
            for k, v in (("status", parsed.value if parsed else None), ("customer_id", customer_id))
            if v is not None
        }
        return ServiceResult(ok=True, op=op, data=shipment_list_data(items, **filters))


# ----------------------------------------------------------------------
# Pipeline helpers
# ----------------------------------------------------------------------


def _validate_inputs(
    op: str,
    weight: Any,
    address: str | None,
    office_id: int | None,
) -> tuple[AddressDestination | OfficeDestination, Decimal] | ServiceResult:
    """Destination first, then weight; returns the first failure."""
    try:
        destination = make_destination(address, office_id)
    except DestinationError:
        return ServiceResult.failure(
            op,
            ErrorCode.INVALID_DESTINATION,
            f"Destination {DESTINATION_ERROR}",
        )
    normalized, message = normalize_weight(weight)
    if normalized is None:
        return ServiceResult.failure(op, ErrorCode.INVALID_WEIGHT, str(message))
    return destination, normalized


def _first_missing(
    txn: StoreTransaction,
    op: str,
    refs: list[tuple[str, int | None]],
) -> ServiceResult | None:
    """NOT_FOUND for the first referenced row that does not exist."""
    for entity, entity_id in refs:
        if entity_id is None:
            continue
        if not txn.directory.exists(entity, entity_id):
            return not_found(op, entity, entity_id)
    return None


def _price(
    txn: StoreTransaction,
    weight: Decimal,
    destination: AddressDestination | OfficeDestination,
) -> Decimal | None:
    config = txn.pricing.active()
    if config is None:
        return None
    return calculate_price(config, weight, is_office_delivery=is_office_delivery(destination))


def _invalid_transition(op: str, current: str, target: str) -> ServiceResult:
    allowed = allowed_targets(current)
    return ServiceResult.failure(
        op,
        ErrorCode.INVALID_STATUS_TRANSITION,
        f"Invalid status transition: {current} -> {target}. Allowed: {allowed}",
        current=str(current),
        requested=str(target),
    )
