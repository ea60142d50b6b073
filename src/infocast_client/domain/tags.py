"""
infocast_client.domain.tags

Tag set used by broadcast drafts and for tag comparison on fetched broadcasts.

Responsibilities:
- Set-insert with whitespace trimming; empty and duplicate candidates are ignored.
- Set-delete by exact value; removing a non-member is a no-op.
- Order-insensitive equality (iteration keeps insertion order for display).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class TagSet:
    __slots__ = ("_tags",)

    def __init__(self, tags: Iterable[str] = ()) -> None:
        # dict keys give set semantics while keeping insertion order.
        self._tags: dict[str, None] = {}
        for tag in tags:
            self.add(tag)

    def add(self, candidate: str) -> bool:
        tag = candidate.strip()
        if not tag or tag in self._tags:
            return False
        self._tags[tag] = None
        return True

    def remove(self, tag: str) -> bool:
        if tag not in self._tags:
            return False
        del self._tags[tag]
        return True

    def as_tuple(self) -> tuple[str, ...]:
        return tuple(self._tags)

    def __contains__(self, tag: object) -> bool:
        return tag in self._tags

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._tags))

    def __len__(self) -> int:
        return len(self._tags)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TagSet):
            return self._tags.keys() == other._tags.keys()
        if isinstance(other, (set, frozenset)):
            return set(self._tags) == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TagSet({list(self._tags)!r})"
