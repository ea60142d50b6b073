"""
tests.conftest

Shared fixtures: settings with per-test storage, the fake API, and client factories.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio
from fake_api import FakeState, create_fake_app
from fastapi import FastAPI

from infocast_client.app import InfoCastClient, create_client
from infocast_client.notifications import NotificationFeed
from infocast_client.settings import Settings

ClientFactory = Callable[..., Awaitable[InfoCastClient]]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        api_base_url="http://test",
        storage_url=f"sqlite+aiosqlite:///{tmp_path / 'client.db'}",
    )


@pytest.fixture
def fake_state() -> FakeState:
    return FakeState()


@pytest.fixture
def fake_app(fake_state: FakeState) -> FastAPI:
    return create_fake_app(fake_state)


@pytest.fixture
def alice(fake_state: FakeState) -> dict[str, Any]:
    return fake_state.add_user(username="alice", email="alice@example.com", password="secret123")


@pytest.fixture
def bob(fake_state: FakeState) -> dict[str, Any]:
    return fake_state.add_user(username="bob", email="bob@example.com", password="hunter22")


@pytest.fixture
def admin(fake_state: FakeState) -> dict[str, Any]:
    return fake_state.add_user(
        username="root", email="root@example.com", password="admin-pass", role="admin"
    )


@pytest_asyncio.fixture
async def make_client(
    settings: Settings, fake_app: FastAPI
) -> AsyncIterator[ClientFactory]:
    opened: list[InfoCastClient] = []

    async def _make(*, transport: httpx.AsyncBaseTransport | None = None) -> InfoCastClient:
        client = await create_client(
            settings=settings,
            transport=transport or httpx.ASGITransport(app=fake_app),
            notifier=NotificationFeed(),
        )
        opened.append(client)
        return client

    yield _make
    for client in opened:
        await client.aclose()


@pytest_asyncio.fixture
async def client(make_client: ClientFactory) -> InfoCastClient:
    return await make_client()

