"""
infocast_client.notifications

User-visible notifications emitted as a side effect of session and broadcast actions.

Responsibilities:
- Define the `Notifier` protocol consumed by the session manager and services.
- Provide `NotificationFeed`, an in-memory notifier with optional listeners.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from infocast_client.observability.logging import get_logger

log = get_logger(__name__)


class NotificationLevel(enum.StrEnum):
    success = "success"
    error = "error"


@dataclass(frozen=True, slots=True)
class Notification:
    level: NotificationLevel
    message: str


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class NotificationFeed:
    """
    Records every notification and forwards it to registered listeners
    (e.g. the CLI prints them to stderr).
    """

    def __init__(self) -> None:
        self._items: list[Notification] = []
        self._listeners: list[Callable[[Notification], None]] = []

    @property
    def items(self) -> tuple[Notification, ...]:
        return tuple(self._items)

    def subscribe(self, listener: Callable[[Notification], None]) -> None:
        self._listeners.append(listener)

    def notify(self, notification: Notification) -> None:
        self._items.append(notification)
        log.debug("notification", level=notification.level.value, message=notification.message)
        for listener in self._listeners:
            listener(notification)

    def drain(self) -> list[Notification]:
        items, self._items = self._items, []
        return items


def success(notifier: Notifier, message: str) -> None:
    notifier.notify(Notification(level=NotificationLevel.success, message=message))


def error(notifier: Notifier, message: str) -> None:
    notifier.notify(Notification(level=NotificationLevel.error, message=message))
