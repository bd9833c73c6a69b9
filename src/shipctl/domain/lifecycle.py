"""Shipment status lifecycle.

Status moves forward only:

    registered -> in_transit -> delivered
         \\             \\
          +-> cancelled  +-> cancelled

``delivered`` and ``cancelled`` are terminal. The transition map is the
single source of truth; adding a status is a data change here, not a
control-flow change in the services.
"""

from __future__ import annotations

from enum import StrEnum


class ShipmentStatus(StrEnum):
    """Lifecycle status of a shipment."""

    REGISTERED = "registered"
    IN_TRANSIT = "in_transit"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# --- Transition map ---

SHIPMENT_TRANSITIONS: dict[ShipmentStatus, frozenset[ShipmentStatus]] = {
    ShipmentStatus.REGISTERED: frozenset({ShipmentStatus.IN_TRANSIT, ShipmentStatus.CANCELLED}),
    ShipmentStatus.IN_TRANSIT: frozenset({ShipmentStatus.DELIVERED, ShipmentStatus.CANCELLED}),
    ShipmentStatus.DELIVERED: frozenset(),
    ShipmentStatus.CANCELLED: frozenset(),
}

TERMINAL_STATUSES: frozenset[ShipmentStatus] = frozenset(
    status for status, allowed in SHIPMENT_TRANSITIONS.items() if not allowed
)


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[ShipmentStatus, frozenset[ShipmentStatus]] = SHIPMENT_TRANSITIONS,
) -> bool:
    """Check if moving from *current* to *target* is in the transition map.

    Self-transitions are not in the map; callers treat them as no-ops.
    """
    if not _known(current):
        return False
    return target in transitions.get(ShipmentStatus(current), frozenset())


def allowed_targets(current: str) -> list[str]:
    """Sorted list of statuses reachable from *current* in one step."""
    if not _known(current):
        return []
    return sorted(str(s) for s in SHIPMENT_TRANSITIONS[ShipmentStatus(current)])


def is_terminal(status: str) -> bool:
    """True for statuses with no outgoing transitions."""
    return status in TERMINAL_STATUSES


def parse_status(value: str) -> ShipmentStatus | None:
    """Parse user input into a status, or None if unrecognized.

    Accepts any case and ``-`` in place of ``_``:

        >>> parse_status("IN-TRANSIT")
        <ShipmentStatus.IN_TRANSIT: 'in_transit'>
    """
    normalized = value.strip().lower().replace("-", "_")
    if not _known(normalized):
        return None
    return ShipmentStatus(normalized)


def _known(value: str) -> bool:
    return value in ShipmentStatus._value2member_map_
