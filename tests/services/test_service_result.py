"""Tests for ServiceResult and ServiceError."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from ordertypes.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="create_order_type", data={"name": "Lab"})
        assert result.ok is True
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure(
            "create_order_type", "VALIDATION_FAILED", "1 error", rejections=[{"field": "name"}]
        )
        assert result.ok is False
        assert result.error == ServiceError(
            code="VALIDATION_FAILED",
            message="1 error",
            detail={"rejections": [{"field": "name"}]},
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="list_order_types", data={"count": 0}, meta={"x": 1})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["count"] == 0
        assert parsed["meta"]["x"] == 1

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="test")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
