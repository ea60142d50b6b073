"""
infocast_client.clients.transport

Credential-attaching HTTP boundary shared by all API clients.

Responsibilities:
- Hold the shared `httpx.AsyncClient` and its default auth header.
- Apply/clear the bearer credential as an explicit, idempotent step.
- Send JSON requests and convert failures into `clients.errors` exceptions.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from infocast_client.clients.errors import ApiTransportError, error_for_response


class CredentialedHttp:
    def __init__(self, *, http: httpx.AsyncClient, auth_header: str = "x-auth-token") -> None:
        self._http = http
        self._auth_header = auth_header

    @property
    def auth_header(self) -> str:
        return self._auth_header

    @property
    def has_credential(self) -> bool:
        return self._auth_header in self._http.headers

    def apply_credential(self, token: str | None) -> None:
        # An empty token is never sent; the header is removed instead.
        if not token:
            self.clear_credential()
            return
        self._http.headers[self._auth_header] = token

    def clear_credential(self) -> None:
        if self._auth_header in self._http.headers:
            del self._http.headers[self._auth_header]

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            r = await self._http.request(
                method,
                path,
                json=dict(json) if json is not None else None,
                params=dict(params) if params else None,
            )
        except httpx.RequestError as e:
            raise ApiTransportError(f"Request failed: {e}") from e

        if r.is_error:
            raise error_for_response(r)
        if not r.content:
            return {}
        try:
            body = r.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {"data": body}


# --- Module Notes -----------------------------------------------------------
# Only `session.manager.SessionManager` calls apply/clear; API clients only send requests.
