"""ServiceResult and ServiceError: the universal service contract.

INVARIANT: Every public service method returns a ServiceResult. Expected
business failures travel in ``error``; they are never raised.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Machine-readable failure kinds carried by :class:`ServiceError`."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_DESTINATION = "INVALID_DESTINATION"
    INVALID_WEIGHT = "INVALID_WEIGHT"
    INVALID_CONFIG = "INVALID_CONFIG"
    INVALID_STATUS = "INVALID_STATUS"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    CANNOT_MODIFY = "CANNOT_MODIFY"
    NO_ACTIVE_CONFIG = "NO_ACTIVE_CONFIG"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"
    CHECK_FAILED = "CHECK_FAILED"
    BACKUP_FAILED = "BACKUP_FAILED"
    MIGRATION_FAILED = "MIGRATION_FAILED"
    STAMP_FAILED = "STAMP_FAILED"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"register_shipment"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Build a failed result with a structured error."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )
