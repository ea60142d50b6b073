"""
infocast_client.db.models

Client storage schema.

Responsibilities:
- Define `StoredValue`, a string key/value row used like browser local storage.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infocast_client.db.base import Base


def _utcnow() -> datetime:
    # Naive UTC timestamps; SQLite has no timezone-aware column type.
    return datetime.now(tz=UTC).replace(tzinfo=None)


class StoredValue(Base):
    __tablename__ = "client_storage"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)


# --- Module Notes -----------------------------------------------------------
# Keys are owned by their writers; `settings.token_storage_key` is the credential key.
