"""
infocast_client.app

Client factory for the InfoCast broadcast client.

Responsibilities:
- Build the shared infrastructure (storage engine, HTTP client) once per process.
- Wire the session manager and broadcast service together.
- Restore the persisted session before handing the client to the UI layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import TracebackType

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from infocast_client.auth.credentials import CredentialStore
from infocast_client.clients.auth_api import AuthApi
from infocast_client.clients.broadcasts_api import BroadcastsApi
from infocast_client.clients.transport import CredentialedHttp
from infocast_client.db.init_db import init_db
from infocast_client.db.session import create_engine, create_sessionmaker
from infocast_client.notifications import NotificationFeed, Notifier
from infocast_client.observability.http_hooks import event_hooks
from infocast_client.observability.logging import configure_logging, get_logger
from infocast_client.services.broadcast_service import BroadcastService
from infocast_client.session.manager import SessionManager
from infocast_client.settings import Settings

log = get_logger(__name__)


@dataclass(slots=True)
class InfoCastClient:
    settings: Settings
    session: SessionManager
    broadcasts: BroadcastService
    notifier: Notifier
    http: httpx.AsyncClient
    engine: AsyncEngine

    async def aclose(self) -> None:
        await self.http.aclose()
        await self.engine.dispose()
        log.info("client_closed")

    async def __aenter__(self) -> InfoCastClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


async def create_client(
    *,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
    notifier: Notifier | None = None,
) -> InfoCastClient:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    engine = create_engine(settings)
    await init_db(engine)
    store = CredentialStore(
        session_factory=create_sessionmaker(engine),
        key=settings.token_storage_key,
    )

    http = httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
        transport=transport,
        event_hooks=event_hooks(),
    )
    transport_boundary = CredentialedHttp(http=http, auth_header=settings.auth_header)
    if notifier is None:
        notifier = NotificationFeed()

    session = SessionManager(
        auth_api=AuthApi(http=transport_boundary),
        http=transport_boundary,
        store=store,
        notifier=notifier,
    )
    broadcasts = BroadcastService(
        api=BroadcastsApi(http=transport_boundary),
        session=session,
        notifier=notifier,
        recent_limit=settings.recent_limit,
    )

    client = InfoCastClient(
        settings=settings,
        session=session,
        broadcasts=broadcasts,
        notifier=notifier,
        http=http,
        engine=engine,
    )
    log.info("startup", env=settings.env, api_base_url=settings.api_base_url)
    try:
        await session.init()
    except BaseException:
        await client.aclose()
        raise
    return client


# --- Module Notes -----------------------------------------------------------
# `session.loading` is False by the time `create_client` returns, so callers never see
# an unauthenticated state while restoration is pending.
