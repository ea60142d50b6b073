"""
infocast_client.clients.auth_api

Client for the identity endpoints under `/api/auth`.

Responsibilities:
- Login/registration (returns token + principal).
- Fetch and update the current principal.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from infocast_client.auth.models import AuthGrant, Principal
from infocast_client.clients.errors import MalformedResponseError
from infocast_client.clients.transport import CredentialedHttp


def _principal(raw: Any) -> Principal:
    try:
        return Principal.model_validate(raw)
    except ValidationError as e:
        raise MalformedResponseError("Malformed user payload") from e


def _grant(body: dict[str, Any]) -> AuthGrant:
    token = body.get("token")
    if not isinstance(token, str) or not token:
        raise MalformedResponseError("Missing token in auth response", payload=body)
    return AuthGrant(token=token, principal=_principal(body.get("user")))


class AuthApi:
    def __init__(self, *, http: CredentialedHttp) -> None:
        self._http = http

    async def me(self) -> Principal:
        body = await self._http.request("GET", "/api/auth/me")
        return _principal(body.get("data"))

    async def login(self, *, credentials: Mapping[str, Any]) -> AuthGrant:
        body = await self._http.request("POST", "/api/auth/login", json=credentials)
        return _grant(body)

    async def register(self, *, user_data: Mapping[str, Any]) -> AuthGrant:
        body = await self._http.request("POST", "/api/auth/register", json=user_data)
        return _grant(body)

    async def update_me(self, *, updates: Mapping[str, Any]) -> Principal:
        body = await self._http.request("PUT", "/api/auth/me", json=updates)
        return _principal(body.get("data"))
