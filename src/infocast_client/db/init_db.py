"""
infocast_client.db.init_db

Storage bootstrap.

Responsibilities:
- Create the client storage table on first run.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from infocast_client.db import models  # noqa: F401  # register tables on Base.metadata
from infocast_client.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist. Safe to call on every startup.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
