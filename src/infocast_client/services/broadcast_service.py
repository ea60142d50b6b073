"""
infocast_client.services.broadcast_service

Broadcast actions as seen from the UI layer.

Responsibilities:
- Reads (list, recent, stats, dashboard) that degrade to empty/zero on failure.
- Mutations (create, update, delete) with local validation, one notification per
  call, and silent session invalidation when the credential is rejected.
- Advisory authorization and card view models for the current principal.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, TypeVar

from infocast_client.auth.policy import can_mutate
from infocast_client.clients.broadcasts_api import BroadcastQuery, BroadcastsApi
from infocast_client.clients.errors import ApiError, AuthenticationError, NotFoundError
from infocast_client.domain.broadcast import (
    Broadcast,
    BroadcastDraft,
    DraftValidationError,
    validate_draft,
)
from infocast_client.domain.display import BroadcastCard, build_card
from infocast_client.domain.stats import StatsSummary
from infocast_client.notifications import Notifier, error, success
from infocast_client.observability.logging import get_logger
from infocast_client.results import ErrorInfo, OperationResult
from infocast_client.session.manager import SessionManager

log = get_logger(__name__)

T = TypeVar("T")

LOGIN_REQUIRED = "Please login to {action} a broadcast"


@dataclass(frozen=True, slots=True)
class Dashboard:
    stats: StatsSummary = field(default_factory=StatsSummary)
    recent: tuple[Broadcast, ...] = ()


class BroadcastService:
    def __init__(
        self,
        *,
        api: BroadcastsApi,
        session: SessionManager,
        notifier: Notifier,
        recent_limit: int = 5,
    ) -> None:
        self._api = api
        self._session = session
        self._notifier = notifier
        self._recent_limit = recent_limit

    # --- reads ---------------------------------------------------------------

    async def list_broadcasts(self, query: BroadcastQuery | None = None) -> list[Broadcast]:
        try:
            return await self._api.list(query)
        except ApiError as e:
            log.warning("list_broadcasts_failed", status=e.status_code, error=str(e))
            return []

    async def recent(self, *, limit: int | None = None) -> list[Broadcast]:
        query = BroadcastQuery(limit=limit or self._recent_limit, status="active")
        return await self.list_broadcasts(query)

    async def stats(self) -> StatsSummary:
        try:
            return await self._api.stats()
        except ApiError as e:
            log.warning("stats_failed", status=e.status_code, error=str(e))
            return StatsSummary()

    async def dashboard(self) -> Dashboard:
        stats, recent = await asyncio.gather(self.stats(), self.recent())
        return Dashboard(stats=stats, recent=tuple(recent))

    async def get(self, broadcast_id: str) -> OperationResult[Broadcast]:
        try:
            return OperationResult.ok(await self._api.get(broadcast_id))
        except NotFoundError as e:
            return OperationResult.failed(ErrorInfo.from_api_error(e, fallback="Broadcast not found"))
        except ApiError as e:
            log.warning("get_broadcast_failed", broadcast_id=broadcast_id, error=str(e))
            return OperationResult.failed(
                ErrorInfo.from_api_error(e, fallback="Failed to load broadcast")
            )

    # --- mutations -----------------------------------------------------------

    async def create(
        self, fields: Mapping[str, Any] | BroadcastDraft
    ) -> OperationResult[Broadcast]:
        return await self._mutate(
            action="create",
            fields=fields,
            call=self._api.create,
            success_message="Broadcast created successfully!",
            fallback="Failed to create broadcast",
        )

    async def update(
        self, broadcast_id: str, fields: Mapping[str, Any] | BroadcastDraft
    ) -> OperationResult[Broadcast]:
        return await self._mutate(
            action="edit",
            fields=fields,
            call=lambda draft: self._api.update(broadcast_id, draft),
            success_message="Broadcast updated successfully",
            fallback="Failed to update broadcast",
        )

    async def delete(self, broadcast_id: str) -> OperationResult[None]:
        if not self._session.is_authenticated:
            return self._login_required("delete")
        return await self._remote(
            lambda: self._api.delete(broadcast_id),
            action="delete",
            success_message="Broadcast deleted successfully",
            fallback="Failed to delete broadcast",
        )

    # --- policy / presentation ----------------------------------------------

    def can_mutate(self, broadcast: Broadcast) -> bool:
        return can_mutate(self._session.principal, broadcast)

    def card(self, broadcast: Broadcast, *, now: datetime | None = None) -> BroadcastCard:
        return build_card(broadcast, principal=self._session.principal, now=now)

    # --- helpers -------------------------------------------------------------

    async def _mutate(
        self,
        *,
        action: str,
        fields: Mapping[str, Any] | BroadcastDraft,
        call: Callable[[BroadcastDraft], Awaitable[Broadcast]],
        success_message: str,
        fallback: str,
    ) -> OperationResult[Broadcast]:
        # Validation errors are reported on the result (per field), never sent.
        try:
            draft = validate_draft(fields)
        except DraftValidationError as e:
            return OperationResult.failed(ErrorInfo(message=str(e), details=e.errors))

        if not self._session.is_authenticated:
            return self._login_required(action)

        return await self._remote(
            lambda: call(draft),
            action=action,
            success_message=success_message,
            fallback=fallback,
        )

    async def _remote(
        self,
        call: Callable[[], Awaitable[T]],
        *,
        action: str,
        success_message: str,
        fallback: str,
    ) -> OperationResult[T]:
        try:
            value = await call()
        except ApiError as e:
            log.warning("broadcast_mutation_failed", action=action, status=e.status_code, error=str(e))
            if isinstance(e, AuthenticationError):
                await self._session.invalidate()
            info = ErrorInfo.from_api_error(e, fallback=fallback)
            error(self._notifier, info.message)
            return OperationResult.failed(info)

        log.info("broadcast_mutation_succeeded", action=action)
        success(self._notifier, success_message)
        return OperationResult.ok(value)

    def _login_required(self, action: str) -> OperationResult[Any]:
        message = LOGIN_REQUIRED.format(action=action)
        error(self._notifier, message)
        return OperationResult.failed(ErrorInfo(message=message))


# --- Module Notes -----------------------------------------------------------
# Stale responses for views that are no longer shown are the caller's concern; this
# service applies no ordering or de-duplication to overlapping calls.
