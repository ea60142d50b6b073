"""
infocast_client.domain.display

Derived display rules for broadcasts (pure functions, no I/O).

Responsibilities:
- Urgency -> severity color, type -> glyph.
- Message excerpts for list views.
- Relative-time labels for creation and expiry timestamps.
- A `BroadcastCard` view model combining the above with the mutation policy.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import UTC, datetime

from infocast_client.auth.models import Principal
from infocast_client.auth.policy import can_mutate
from infocast_client.domain.broadcast import Broadcast, BroadcastType, Urgency

EXCERPT_LENGTH = 200
ELLIPSIS = "..."
UNKNOWN_AUTHOR = "Unknown"


class Severity(enum.StrEnum):
    error = "error"
    warning = "warning"
    success = "success"
    default = "default"


_URGENCY_SEVERITY: dict[Urgency, Severity] = {
    Urgency.high: Severity.error,
    Urgency.medium: Severity.warning,
    Urgency.low: Severity.success,
}

_TYPE_GLYPHS: dict[BroadcastType, str] = {
    BroadcastType.announcement: "📢",
    BroadcastType.alert: "⚠️",
    BroadcastType.maintenance: "🔧",
    BroadcastType.update: "🔄",
    BroadcastType.news: "📰",
    BroadcastType.meeting: "👥",
}


def severity_for(urgency: Urgency | str) -> Severity:
    return _URGENCY_SEVERITY.get(Urgency.parse(urgency), Severity.default)


def glyph_for(type_: BroadcastType | str) -> str:
    return _TYPE_GLYPHS.get(BroadcastType.parse(type_), _TYPE_GLYPHS[BroadcastType.announcement])


def truncate_message(message: str, *, limit: int = EXCERPT_LENGTH) -> str:
    if len(message) <= limit:
        return message
    return f"{message[:limit]}{ELLIPSIS}"


_MINUTES_IN_HOUR = 60
_MINUTES_IN_DAY = 1440
_MINUTES_IN_MONTH = 43200


def _plural(n: int, unit: str) -> str:
    return f"{n} {unit}" if n == 1 else f"{n} {unit}s"


def _distance(seconds: float) -> str:
    minutes = round(seconds / 60)

    if minutes < 1:
        return "less than a minute"
    if minutes < 45:
        return _plural(minutes, "minute")
    if minutes < 90:
        return "about 1 hour"
    if minutes < _MINUTES_IN_DAY:
        return f"about {_plural(round(minutes / _MINUTES_IN_HOUR), 'hour')}"
    if minutes < 2520:
        return "1 day"
    if minutes < _MINUTES_IN_MONTH:
        return _plural(round(minutes / _MINUTES_IN_DAY), "day")
    if minutes < 2 * _MINUTES_IN_MONTH:
        return f"about {_plural(round(minutes / _MINUTES_IN_MONTH), 'month')}"

    months = minutes // _MINUTES_IN_MONTH
    if months < 12:
        return _plural(round(minutes / _MINUTES_IN_MONTH), "month")
    years, rest = divmod(months, 12)
    if rest < 3:
        return f"about {_plural(years, 'year')}"
    if rest < 9:
        return f"over {_plural(years, 'year')}"
    return f"almost {_plural(years + 1, 'year')}"


def relative_time(when: datetime, *, now: datetime | None = None) -> str:
    """
    Human distance between `when` and `now`, suffixed: "5 minutes ago", "in about 2 hours".
    """

    current = now or datetime.now(tz=UTC)
    if current.tzinfo is None:
        current = current.replace(tzinfo=UTC)
    if when.tzinfo is None:
        when = when.replace(tzinfo=UTC)

    delta = (when - current).total_seconds()
    label = _distance(abs(delta))
    return f"in {label}" if delta > 0 else f"{label} ago"


def expiry_label(broadcast: Broadcast, *, now: datetime | None = None) -> str | None:
    if broadcast.expiry_date is None:
        return None
    distance = relative_time(broadcast.expiry_date, now=now)
    if broadcast.is_expired(now=now):
        return f"Expired {distance}"
    return f"Expires {distance}"


def author_label(broadcast: Broadcast) -> str:
    creator = broadcast.created_by
    if creator is None or not creator.username:
        return UNKNOWN_AUTHOR
    return creator.username


@dataclass(frozen=True, slots=True)
class BroadcastCard:
    id: str
    title: str
    urgency: str
    severity: Severity
    type: str
    glyph: str
    excerpt: str
    tags: tuple[str, ...]
    author: str
    created: str | None
    views: int
    expiry: str | None
    expired: bool
    can_edit: bool
    can_delete: bool


def build_card(
    broadcast: Broadcast,
    *,
    principal: Principal | None,
    now: datetime | None = None,
) -> BroadcastCard:
    allowed = can_mutate(principal, broadcast)
    expired = broadcast.is_expired(now=now)
    return BroadcastCard(
        id=broadcast.id,
        title=broadcast.title,
        urgency=broadcast.urgency.value,
        severity=severity_for(broadcast.urgency),
        type=broadcast.type.value,
        glyph=glyph_for(broadcast.type),
        excerpt=truncate_message(broadcast.message),
        tags=broadcast.tags,
        author=author_label(broadcast),
        created=relative_time(broadcast.created_at, now=now) if broadcast.created_at else None,
        views=broadcast.views,
        expiry=expiry_label(broadcast, now=now),
        expired=expired,
        can_edit=allowed,
        can_delete=allowed,
    )


# --- Module Notes -----------------------------------------------------------
# Expired broadcasts stay listed; `expired` only changes how a card is labelled.
