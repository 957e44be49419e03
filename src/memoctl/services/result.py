"""ServiceResult and ServiceError — what every service call returns.

INVARIANT: service methods never raise for expected failures (missing
document, occupied path, bad input, provider failure). They return
``ok=False`` with a :class:`ServiceError` and leave storage untouched.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """``ServiceError.code`` values."""

    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    EMPTY_CONTENT = "EMPTY_CONTENT"
    MISSING_REFERENCE = "MISSING_REFERENCE"
    INVALID_PRIORITY = "INVALID_PRIORITY"
    INVALID_STAR = "INVALID_STAR"
    INVALID_QUERY = "INVALID_QUERY"
    GENERATION_FAILED = "GENERATION_FAILED"
    STORAGE_ERROR = "STORAGE_ERROR"


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
        op: Name of the operation (e.g. ``"create_memo"``). Renderers
            dispatch on it.
        data: Operation-specific payload on success.
        warnings: Non-fatal issues, e.g. a topic notification that could
            not be written.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry spans under ``--verbose``).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
