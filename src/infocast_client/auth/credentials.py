"""
infocast_client.auth.credentials

Durable credential persistence.

Responsibilities:
- Read, write and remove the bearer token under a single well-known storage key.
- Own the storage session scope (one short transaction per operation).
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from infocast_client.db.repositories.storage import StorageRepo
from infocast_client.observability.logging import get_logger

log = get_logger(__name__)


class CredentialStore:
    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        key: str = "token",
    ) -> None:
        self._session_factory = session_factory
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> str | None:
        async with self._session_factory() as session:
            token = await StorageRepo(session).get(self._key)
        # An empty stored value is treated as no credential.
        return token or None

    async def save(self, token: str) -> None:
        async with self._session_factory() as session:
            await StorageRepo(session).put(key=self._key, value=token)
            await session.commit()
        log.debug("credential_saved", key=self._key)

    async def remove(self) -> None:
        async with self._session_factory() as session:
            removed = await StorageRepo(session).delete(self._key)
            await session.commit()
        log.debug("credential_removed", key=self._key, existed=removed)


# --- Module Notes -----------------------------------------------------------
# Only `session.manager.SessionManager` writes through this store.
