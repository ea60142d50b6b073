"""
tests.test_tags

Tag set semantics for drafts and fetched broadcasts.
"""

from __future__ import annotations

from infocast_client.domain.broadcast import Broadcast
from infocast_client.domain.tags import TagSet


def test_add_is_idempotent_and_trims() -> None:
    tags = TagSet()

    assert tags.add("urgent") is True
    assert tags.add("urgent") is False
    assert tags.add("  urgent  ") is False
    assert tags.add("   ") is False
    assert tags.add(" ops ") is True

    assert tags.as_tuple() == ("urgent", "ops")
    assert len(tags) == 2


def test_remove_non_member_is_noop() -> None:
    tags = TagSet(["a", "b"])

    assert tags.remove("c") is False
    assert tags.remove("a") is True
    assert list(tags) == ["b"]
    assert "a" not in tags


def test_equality_ignores_order() -> None:
    assert TagSet(["a", "b"]) == TagSet(["b", "a"])
    assert TagSet(["a", "b"]) == {"a", "b"}
    assert TagSet(["a", "b"]) == frozenset({"b", "a"})
    assert TagSet(["a"]) != TagSet(["a", "b"])
    # Lists are ordered sequences, not sets.
    assert TagSet(["a"]) != ["a"]


def test_broadcast_tags_are_normalized_and_compared_as_sets() -> None:
    base = {"_id": "b1", "title": "t", "message": "m", "urgency": "low", "type": "news"}
    first = Broadcast.model_validate({**base, "tags": ["x", " y", "x", ""]})
    second = Broadcast.model_validate({**base, "tags": ["y", "x"]})

    assert first.tags == ("x", "y")
    assert first.same_tags(second)
    assert first.same_tags(["y", "x"])
    assert not first.same_tags(["x"])
