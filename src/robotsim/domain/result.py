"""ServiceResult and ServiceError — the universal operation contract.

INVARIANT: Robot operations, command objects, and the application service
all return ServiceResult. Expected failures are never raised.
The CLI session and any future interface consume this type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Success-or-failure outcome of a single operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"place"``, ``"report"``).
        data: Operation-specific payload on success. Commands put the
            human-readable confirmation under ``"message"``.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (input text, timing, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def message(self) -> str:
        """The single human-readable line for this outcome."""
        if self.ok:
            return str(self.data.get("message", ""))
        return self.error.message if self.error else "Unknown error"

    @classmethod
    def success(cls, op: str, message: str = "", **data: Any) -> ServiceResult:
        payload = {"message": message, **data} if message else dict(data)
        return cls(ok=True, op=op, data=payload)

    @classmethod
    def failure(cls, op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return cls(ok=False, op=op, error=ServiceError(code=code, message=message, detail=detail))
