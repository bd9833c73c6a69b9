"""Tests for ServiceResult, ServiceError and ErrorCode."""

from __future__ import annotations

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from shipctl.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="get_shipment", data={"id": 1})
        assert result.ok is True
        assert result.data == {"id": 1}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure(
            "update_status",
            ErrorCode.INVALID_STATUS_TRANSITION,
            "nope",
            current="registered",
            requested="delivered",
        )
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "INVALID_STATUS_TRANSITION"
        assert result.error.detail == {"current": "registered", "requested": "delivered"}

    def test_json_renders_decimals_as_strings(self) -> None:
        result = ServiceResult(ok=True, op="calculate_price", data={"price": Decimal("10.50")})
        parsed = json.loads(result.model_dump_json())
        assert parsed["data"]["price"] == "10.50"

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_error_frozen(self) -> None:
        error = ServiceError(code="NOT_FOUND", message="gone")
        with pytest.raises(ValidationError):
            error.code = "OTHER"  # type: ignore[misc]


class TestErrorCode:
    def test_codes_are_strings(self) -> None:
        assert ErrorCode.NOT_FOUND == "NOT_FOUND"
        assert {c.value for c in ErrorCode} >= {
            "NOT_FOUND",
            "INVALID_DESTINATION",
            "INVALID_WEIGHT",
            "INVALID_CONFIG",
            "INVALID_STATUS_TRANSITION",
            "CANNOT_MODIFY",
            "NO_ACTIVE_CONFIG",
        }
