"""
infocast_client.clients.broadcasts_api

Client for the broadcast endpoints under `/api/broadcasts`.

Responsibilities:
- List (with filters), fetch, create, update and delete broadcasts.
- Fetch the stats summary.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

from pydantic import ValidationError

from infocast_client.clients.errors import MalformedResponseError
from infocast_client.clients.transport import CredentialedHttp
from infocast_client.domain.broadcast import Broadcast, BroadcastDraft
from infocast_client.domain.stats import StatsSummary


@dataclass(frozen=True, slots=True)
class BroadcastQuery:
    # Unset filters are omitted from the query string.
    limit: int | None = None
    page: int | None = None
    status: Literal["active", "expired"] | None = None
    urgency: str | None = None
    type: str | None = None
    tag: str | None = None
    search: str | None = None

    def to_params(self) -> dict[str, str]:
        return {k: str(v) for k, v in asdict(self).items() if v is not None and v != ""}


def _broadcast(raw: Any) -> Broadcast:
    try:
        return Broadcast.model_validate(raw)
    except ValidationError as e:
        raise MalformedResponseError("Malformed broadcast payload") from e


class BroadcastsApi:
    def __init__(self, *, http: CredentialedHttp) -> None:
        self._http = http

    async def list(self, query: BroadcastQuery | None = None) -> list[Broadcast]:
        params = (query or BroadcastQuery()).to_params()
        body = await self._http.request("GET", "/api/broadcasts", params=params)
        data = body.get("data")
        if not isinstance(data, list):
            raise MalformedResponseError("Expected a list of broadcasts", payload=body)
        return [_broadcast(item) for item in data]

    async def get(self, broadcast_id: str) -> Broadcast:
        body = await self._http.request("GET", f"/api/broadcasts/{broadcast_id}")
        return _broadcast(body.get("data"))

    async def create(self, draft: BroadcastDraft) -> Broadcast:
        body = await self._http.request("POST", "/api/broadcasts", json=draft.to_payload())
        return _broadcast(body.get("data"))

    async def update(self, broadcast_id: str, draft: BroadcastDraft) -> Broadcast:
        body = await self._http.request(
            "PUT",
            f"/api/broadcasts/{broadcast_id}",
            json=draft.to_payload(),
        )
        return _broadcast(body.get("data"))

    async def delete(self, broadcast_id: str) -> None:
        await self._http.request("DELETE", f"/api/broadcasts/{broadcast_id}")

    async def stats(self) -> StatsSummary:
        body = await self._http.request("GET", "/api/broadcasts/stats/summary")
        return StatsSummary.from_payload(body.get("data"))


# --- Module Notes -----------------------------------------------------------
# Read endpoints need no credential; the header is sent anyway once attached.
