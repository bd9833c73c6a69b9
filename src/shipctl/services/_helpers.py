"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, date, datetime, time
from typing import Any

from shipctl.services.result import ErrorCode, ServiceResult


def now_iso() -> str:
    """Current UTC time as fixed-width ISO 8601 with microseconds.

    Fixed width keeps lexical order equal to chronological order, which
    the delivered-at range queries rely on.
    """
    return datetime.now(UTC).isoformat(timespec="microseconds")


def day_start_iso(day: date) -> str:
    """First instant of *day* (UTC)."""
    return datetime.combine(day, time.min, tzinfo=UTC).isoformat(timespec="microseconds")


def day_end_iso(day: date) -> str:
    """Last representable instant of *day* (UTC)."""
    return datetime.combine(day, time.max, tzinfo=UTC).isoformat(timespec="microseconds")


def parse_day(value: date | str) -> date | None:
    """Accept a date or a ``YYYY-MM-DD`` string. Returns None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return None


def not_found(op: str, entity: str, entity_id: Any) -> ServiceResult:
    """Failed result for a missing customer, employee, office, or shipment."""
    return ServiceResult.failure(
        op,
        ErrorCode.NOT_FOUND,
        f"{entity.capitalize()} not found: {entity_id}",
        entity=entity,
        id=entity_id,
    )


def now_compact() -> str:
    """Current UTC time as compact ISO (YYYYMMDDTHHmmss, for backup filenames)."""
    return datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
