"""
infocast_client.observability.http_hooks

httpx event hooks for request-scoped logging.

Responsibilities:
- Generate/propagate an `x-request-id` header on every outgoing request.
- Log one event per request and per response with method, path and status.
"""

from __future__ import annotations

import uuid
from typing import Any

import httpx

from infocast_client.observability.logging import get_logger

log = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


async def log_request(request: httpx.Request) -> None:
    # Prefer a caller-provided request id for trace continuity; otherwise generate one.
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    request.headers[REQUEST_ID_HEADER] = request_id
    log.debug(
        "http_request",
        method=request.method,
        path=request.url.path,
        request_id=request_id,
    )


async def log_response(response: httpx.Response) -> None:
    request = response.request
    event = "http_response_error" if response.is_error else "http_response"
    log.info(
        event,
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        request_id=request.headers.get(REQUEST_ID_HEADER),
    )


def event_hooks() -> dict[str, list[Any]]:
    return {"request": [log_request], "response": [log_response]}


# --- Module Notes -----------------------------------------------------------
# Hooks only see headers by name; the auth header is never passed to the logger.
