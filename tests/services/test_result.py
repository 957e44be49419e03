"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from memoctl.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="create_memo", data={"path": "a.md"})
        assert result.ok is True
        assert result.data == {"path": "a.md"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("archive", ErrorCode.NOT_FOUND, "No document", path="x")
        assert result.ok is False
        assert result.error == ServiceError(
            code="NOT_FOUND", message="No document", detail={"path": "x"}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult.failure("set_priority", ErrorCode.INVALID_PRIORITY, "bad", value=9)
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is False
        assert parsed["error"]["code"] == "INVALID_PRIORITY"
        assert parsed["error"]["detail"] == {"value": 9}

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="x")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]
