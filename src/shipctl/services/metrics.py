"""MetricsService: read-only revenue, dashboard and customer aggregates.

Every method reads inside one snapshot transaction, so the numbers in a
single report are mutually consistent even while writers are active.
"""

from __future__ import annotations

from datetime import date

from shipctl.domain.lifecycle import ShipmentStatus
from shipctl.services._helpers import day_end_iso, day_start_iso, not_found, parse_day
from shipctl.services.base import BaseService
from shipctl.services.result import ErrorCode, ServiceResult
from shipctl.services.shipment import shipment_list_data
from shipctl.services.telemetry import traced

DELIVERED = ShipmentStatus.DELIVERED.value
IN_TRANSIT = ShipmentStatus.IN_TRANSIT.value


class MetricsService(BaseService):
    """Counts and sums over persisted shipments."""

    @traced
    def revenue_report(self, start_date: date | str, end_date: date | str) -> ServiceResult:
        """Revenue from shipments delivered between two UTC days, inclusive."""
        op = "revenue_report"
        start = parse_day(start_date)
        end = parse_day(end_date)
        if start is None or end is None:
            bad = start_date if start is None else end_date
            return ServiceResult.failure(
                op,
                ErrorCode.INVALID_DATE_RANGE,
                f"Invalid date: {bad!r} (expected YYYY-MM-DD)",
                start_date=str(start_date),
                end_date=str(end_date),
            )
        window_start, window_end = day_start_iso(start), day_end_iso(end)
        with self._store.snapshot() as txn:
            revenue = txn.shipments.sum_price(
                status=DELIVERED,
                delivered_from=window_start,
                delivered_to=window_end,
            )
            delivered = txn.shipments.count_delivered_between(window_start, window_end)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "total_revenue": revenue,
                "delivered_count": delivered,
            },
        )

    @traced
    def dashboard_metrics(self) -> ServiceResult:
        with self._store.snapshot() as txn:
            total = txn.shipments.count()
            in_transit = txn.shipments.count(status=IN_TRANSIT)
            delivered = txn.shipments.count(status=DELIVERED)
            revenue = txn.shipments.sum_price(status=DELIVERED)

        return ServiceResult(
            ok=True,
            op="dashboard_metrics",
            data={
                "total": total,
                "in_transit": in_transit,
                "delivered": delivered,
                "total_revenue": revenue,
            },
        )

    @traced
    def customer_metrics(self, customer_id: int) -> ServiceResult:
        """Activity summary for one customer.

        ``received`` counts delivered shipments only; ``total_spent`` sums
        every shipment the customer sent, whatever its status.
        """
        op = "customer_metrics"
        with self._store.snapshot() as txn:
            if not txn.directory.exists("customer", customer_id):
                return not_found(op, "customer", customer_id)
            shipments = txn.shipments
            sent = shipments.count(sender_id=customer_id)
            received = shipments.count(recipient_id=customer_id, status=DELIVERED)
            in_transit = shipments.count(
                sender_id=customer_id, status=IN_TRANSIT
            ) + shipments.count(recipient_id=customer_id, status=IN_TRANSIT)
            spent = shipments.sum_price(sender_id=customer_id)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "customer_id": customer_id,
                "sent": sent,
                "received": received,
                "in_transit": in_transit,
                "total_spent": spent,
            },
        )

    # ------------------------------------------------------------------
    # Listing reports
    # ------------------------------------------------------------------

    @traced
    def shipments_by_employee(self, employee_id: int) -> ServiceResult:
        op = "list_shipments"
        with self._store.snapshot() as txn:
            if not txn.directory.exists("employee", employee_id):
                return not_found(op, "employee", employee_id)
            items = txn.shipments.find(registered_by_id=employee_id)
        return ServiceResult(
            ok=True, op=op, data=shipment_list_data(items, registered_by_id=employee_id)
        )

    @traced
    def pending_shipments(self) -> ServiceResult:
        """Every shipment not yet delivered (cancelled ones included)."""
        with self._store.snapshot() as txn:
            items = txn.shipments.find(exclude_status=DELIVERED)
        return ServiceResult(
            ok=True,
            op="list_shipments",
            data=shipment_list_data(items, exclude_status=DELIVERED),
        )

    @traced
    def shipments_sent_by(self, customer_id: int) -> ServiceResult:
        op = "list_shipments"
        with self._store.snapshot() as txn:
            if not txn.directory.exists("customer", customer_id):
                return not_found(op, "customer", customer_id)
            items = txn.shipments.find(sender_id=customer_id)
        return ServiceResult(ok=True, op=op, data=shipment_list_data(items, sender_id=customer_id))

    @traced
    def shipments_received_by(self, customer_id: int) -> ServiceResult:
        op = "list_shipments"
        with self._store.snapshot() as txn:
            if not txn.directory.exists("customer", customer_id):
                return not_found(op, "customer", customer_id)
            items = txn.shipments.find(recipient_id=customer_id)
        return ServiceResult(
            ok=True, op=op, data=shipment_list_data(items, recipient_id=customer_id)
        )
