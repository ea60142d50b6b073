"""
tests.helpers

Small helpers shared by the integration tests.
"""

from __future__ import annotations

from typing import Any

from infocast_client.app import InfoCastClient
from infocast_client.notifications import Notification, NotificationFeed


def feed(client: InfoCastClient) -> NotificationFeed:
    assert isinstance(client.notifier, NotificationFeed)
    return client.notifier


def notifications(client: InfoCastClient) -> list[tuple[str, str]]:
    return [(n.level.value, n.message) for n in feed(client).items]


async def login(client: InfoCastClient, user: dict[str, Any]) -> None:
    result = await client.session.login({"email": user["email"], "password": user["password"]})
    assert result.success, result.error
    # Tests assert only on notifications emitted after this point.
    drained: list[Notification] = feed(client).drain()
    assert len(drained) == 1
