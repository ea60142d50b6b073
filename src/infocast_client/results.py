"""
infocast_client.results

Structured outcome of a user action.

Responsibilities:
- One result shape for success and every kind of failure (validation, transport,
  authentication, authorization, not found).
- Build failures from `ApiError` with a server message or a caller fallback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from infocast_client.clients.errors import ApiError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    message: str
    status_code: int | None = None
    # Server error body, or per-field messages for local validation failures.
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api_error(cls, error: ApiError, *, fallback: str) -> ErrorInfo:
        return cls(
            message=error.server_message or fallback,
            status_code=error.status_code,
            details=dict(error.payload),
        )


@dataclass(frozen=True, slots=True)
class OperationResult(Generic[T]):
    success: bool
    value: T | None = None
    error: ErrorInfo | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> OperationResult[T]:
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, error: ErrorInfo) -> OperationResult[T]:
        return cls(success=False, error=error)


# --- Module Notes -----------------------------------------------------------
# Produced by `session.manager` and `services.broadcast_service`; never raised.
