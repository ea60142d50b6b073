"""
infocast_client.domain.broadcast

Broadcast entity and draft validation.

Responsibilities:
- Model broadcasts received from the server (`Broadcast`), degrading gracefully on
  urgency/type values outside the known enumerations.
- Model and validate submissions (`BroadcastDraft`) before they reach the network.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from infocast_client.domain.tags import TagSet

TITLE_MAX_LENGTH = 200
MESSAGE_MAX_LENGTH = 5000


class Urgency(enum.StrEnum):
    low = "low"
    medium = "medium"
    high = "high"
    # Display-only arm for values the server knows and this client does not.
    unknown = "unknown"

    @classmethod
    def parse(cls, raw: Any) -> Urgency:
        try:
            return cls(str(raw))
        except ValueError:
            return cls.unknown

    @classmethod
    def selectable(cls) -> tuple[Urgency, ...]:
        return (cls.low, cls.medium, cls.high)


class BroadcastType(enum.StrEnum):
    announcement = "announcement"
    alert = "alert"
    maintenance = "maintenance"
    update = "update"
    news = "news"
    meeting = "meeting"
    # Display-only arm, see `Urgency.unknown`.
    other = "other"

    @classmethod
    def parse(cls, raw: Any) -> BroadcastType:
        try:
            return cls(str(raw))
        except ValueError:
            return cls.other

    @classmethod
    def selectable(cls) -> tuple[BroadcastType, ...]:
        return tuple(t for t in cls if t is not cls.other)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _normalize_tags(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, Iterable):
        raise ValueError("tags must be a list of strings")
    return TagSet(str(tag) for tag in value).as_tuple()


class Creator(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    username: str | None = None


class Broadcast(BaseModel):
    """
    Transient view copy of a server-side broadcast.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str
    message: str
    urgency: Urgency
    type: BroadcastType
    tags: tuple[str, ...] = ()
    expiry_date: datetime | None = Field(
        default=None, validation_alias=AliasChoices("expiryDate", "expiry_date")
    )
    created_by: Creator | None = Field(
        default=None, validation_alias=AliasChoices("createdBy", "created_by")
    )
    views: int = 0
    created_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("createdAt", "created_at")
    )

    @field_validator("urgency", mode="before")
    @classmethod
    def _parse_urgency(cls, value: Any) -> Urgency:
        return Urgency.parse(value)

    @field_validator("type", mode="before")
    @classmethod
    def _parse_type(cls, value: Any) -> BroadcastType:
        return BroadcastType.parse(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _parse_tags(cls, value: Any) -> tuple[str, ...]:
        return _normalize_tags(value)

    @field_validator("created_by", mode="before")
    @classmethod
    def _parse_creator(cls, value: Any) -> Any:
        # Unpopulated references arrive as a bare id.
        if isinstance(value, (str, int)):
            return {"_id": value}
        return value

    @field_validator("views", mode="before")
    @classmethod
    def _parse_views(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("expiry_date", "created_at")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    @property
    def tag_set(self) -> frozenset[str]:
        return frozenset(self.tags)

    def same_tags(self, other: Broadcast | Iterable[str]) -> bool:
        theirs = other.tag_set if isinstance(other, Broadcast) else frozenset(other)
        return self.tag_set == theirs

    def is_expired(self, *, now: datetime | None = None) -> bool:
        if self.expiry_date is None:
            return False
        current = _as_utc(now) if now is not None else datetime.now(tz=UTC)
        return current > self.expiry_date

    def is_active(self, *, now: datetime | None = None) -> bool:
        return not self.is_expired(now=now)


class BroadcastDraft(BaseModel):
    """
    A validated create/edit submission.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    message: str = Field(min_length=1, max_length=MESSAGE_MAX_LENGTH)
    urgency: Urgency
    type: BroadcastType
    tags: tuple[str, ...] = ()
    expiry_date: datetime | None = Field(
        default=None, validation_alias=AliasChoices("expiry_date", "expiryDate")
    )

    @field_validator("urgency")
    @classmethod
    def _selectable_urgency(cls, value: Urgency) -> Urgency:
        if value not in Urgency.selectable():
            raise ValueError("not a selectable urgency")
        return value

    @field_validator("type")
    @classmethod
    def _selectable_type(cls, value: BroadcastType) -> BroadcastType:
        if value not in BroadcastType.selectable():
            raise ValueError("not a selectable type")
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _parse_tags(cls, value: Any) -> tuple[str, ...]:
        return _normalize_tags(value)

    @field_validator("expiry_date")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)

    def to_payload(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "message": self.message,
            "urgency": self.urgency.value,
            "type": self.type.value,
            "tags": list(self.tags),
            "expiryDate": self.expiry_date.isoformat() if self.expiry_date else None,
        }


class DraftValidationError(ValueError):
    """
    Local constraint violations; `errors` maps field name to a user-facing message.
    """

    def __init__(self, errors: Mapping[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()) or "Invalid broadcast")


_FIELD_LABELS = {
    "title": "Title",
    "message": "Message",
    "urgency": "Urgency",
    "type": "Type",
    "tags": "Tags",
    "expiry_date": "Expiry date",
    "expiryDate": "Expiry date",
}

_CHOICES = {
    "urgency": ", ".join(Urgency.selectable()),
    "type": ", ".join(BroadcastType.selectable()),
}


def _describe(error: Mapping[str, Any]) -> tuple[str, str]:
    loc = error.get("loc") or ()
    field = str(loc[0]) if loc else "draft"
    label = _FIELD_LABELS.get(field, field)
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind in ("missing", "string_too_short"):
        return field, f"{label} is required"
    if kind == "string_too_long":
        return field, f"{label} must be at most {ctx.get('max_length')} characters"
    if field in _CHOICES:
        return field, f"{label} must be one of: {_CHOICES[field]}"
    if kind == "extra_forbidden":
        return field, f"Unknown field '{field}'"
    return field, f"{label}: {error.get('msg', 'invalid value')}"


def validate_draft(fields: Mapping[str, Any] | BroadcastDraft) -> BroadcastDraft:
    """
    Validate raw form fields into a `BroadcastDraft`.

    Raises `DraftValidationError` with one message per offending field.
    """

    if isinstance(fields, BroadcastDraft):
        return fields
    try:
        return BroadcastDraft.model_validate(dict(fields))
    except ValidationError as e:
        errors: dict[str, str] = {}
        for err in e.errors():
            field, message = _describe(err)
            errors.setdefault(field, message)
        raise DraftValidationError(errors) from e


def draft_fields(broadcast: Broadcast) -> dict[str, Any]:
    """
    Editable fields of an existing broadcast, as input for `validate_draft`.
    """

    return {
        "title": broadcast.title,
        "message": broadcast.message,
        "urgency": broadcast.urgency.value,
        "type": broadcast.type.value,
        "tags": list(broadcast.tags),
        "expiry_date": broadcast.expiry_date,
    }


# --- Module Notes -----------------------------------------------------------
# `Broadcast` accepts the `unknown`/`other` arms for display; `BroadcastDraft` rejects
# them, so a broadcast carrying one cannot be re-submitted without choosing a value.
