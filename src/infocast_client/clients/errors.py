"""
infocast_client.clients.errors

Remote API error taxonomy.

Responsibilities:
- Map HTTP failures onto typed exceptions (authentication, authorization, not found).
- Carry the server-reported `message` when the response body has one.
"""

from __future__ import annotations

from typing import Any

import httpx


class ApiError(Exception):
    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        server_message: str | None = None,
        payload: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.server_message = server_message
        self.payload = payload or {}


class ApiTransportError(ApiError):
    """Network-level failure; no response was received."""


class AuthenticationError(ApiError):
    pass


class AuthorizationError(ApiError):
    pass


class NotFoundError(ApiError):
    pass


class MalformedResponseError(ApiError):
    """A success response whose body does not match the expected contract."""


_BY_STATUS: dict[int, type[ApiError]] = {
    httpx.codes.UNAUTHORIZED: AuthenticationError,
    httpx.codes.FORBIDDEN: AuthorizationError,
    httpx.codes.NOT_FOUND: NotFoundError,
}


def _body(response: httpx.Response) -> dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def error_for_response(response: httpx.Response) -> ApiError:
    payload = _body(response)
    raw = payload.get("message")
    server_message = raw if isinstance(raw, str) and raw.strip() else None
    cls = _BY_STATUS.get(response.status_code, ApiError)
    return cls(
        server_message or f"HTTP {response.status_code}",
        status_code=response.status_code,
        server_message=server_message,
        payload=payload,
    )


# --- Module Notes -----------------------------------------------------------
# Callers above the client layer convert these into `OperationResult` failures
# (see `infocast_client.results`).
