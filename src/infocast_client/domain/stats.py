"""
infocast_client.domain.stats

Stats summary shaping.

Responsibilities:
- Turn the `/api/broadcasts/stats/summary` payload into a `StatsSummary`.
- Tolerate absent or partial aggregate fields by rendering zero.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from infocast_client.domain.broadcast import Urgency


def _count(value: Any) -> int:
    # Aggregation results arrive as `[{"count": n}]`; plain ints are accepted too.
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, Mapping):
        value = value.get("count")
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0
    # JSON may carry NaN/Infinity.
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(int(value), 0)


def _group_counts(value: Any) -> dict[str, int]:
    counts: dict[str, int] = {}
    if isinstance(value, Mapping):
        items = value.items()
    elif isinstance(value, list):
        items = [
            (row.get("_id", row.get("urgency")), row.get("count"))
            for row in value
            if isinstance(row, Mapping)
        ]
    else:
        return counts
    for key, raw in items:
        if key is None:
            continue
        counts[str(key)] = counts.get(str(key), 0) + _count(raw)
    return counts


@dataclass(frozen=True, slots=True)
class StatsSummary:
    total_broadcasts: int = 0
    active_broadcasts: int = 0
    by_urgency: Mapping[str, int] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> StatsSummary:
        if not isinstance(payload, Mapping):
            return cls()
        return cls(
            total_broadcasts=_count(payload.get("totalBroadcasts")),
            active_broadcasts=_count(payload.get("activeBroadcasts")),
            by_urgency=_group_counts(payload.get("byUrgency")),
        )

    def count_for(self, urgency: Urgency | str) -> int:
        return self.by_urgency.get(str(urgency), 0)

    @property
    def urgent_alerts(self) -> int:
        return self.count_for(Urgency.high)


# --- Module Notes -----------------------------------------------------------
# Urgency keys are kept as raw strings so values unknown to this client still count.
