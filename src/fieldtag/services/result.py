"""Frozen result models returned by every fieldtag service call.

Commands never catch engine exceptions themselves: a service turns them
into a failed :class:`ServiceResult` carrying one of the
:class:`ErrorCode` values, and the CLI maps ``ok`` to the exit status.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Failure categories reported by the services."""

    INVALID_VALUE = "invalid_value"
    INVALID_RULE = "invalid_rule"
    VALIDATION_FAILED = "validation_failed"


class ServiceError(BaseModel):
    """Why an operation failed; ``detail`` holds the offending rule or value."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name, also the CLI command name (``"check"``).
        data: Payload of a successful operation.
        warnings: Problems that did not stop the operation, such as an
            annotation value that could not be unquoted.
        error: Set exactly when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def success(
        cls, op: str, data: dict[str, Any], *, warnings: list[str] | None = None
    ) -> ServiceResult:
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def failure(cls, op: str, code: ErrorCode, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
