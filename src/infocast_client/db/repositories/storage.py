from __future__ import annotations

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from infocast_client.db.models import StoredValue


class StorageRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, key: str) -> str | None:
        row = await self._session.get(StoredValue, key)
        return row.value if row is not None else None

    async def put(self, *, key: str, value: str) -> StoredValue:
        existing = await self._session.get(StoredValue, key)
        if existing is not None:
            existing.value = value
            await self._session.flush()
            return existing

        row = StoredValue(key=key, value=value)
        self._session.add(row)
        await self._session.flush()
        return row

    async def delete(self, key: str) -> bool:
        result = await self._session.execute(delete(StoredValue).where(StoredValue.key == key))
        return bool(result.rowcount)
