"""
infocast_client.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) held by the session.
- Define `AuthGrant`, the token + principal pair returned by login/registration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

ADMIN_ROLE = "admin"


class Principal(BaseModel):
    """
    Authenticated user identity as known to the client.

    Unknown server fields are kept as profile data (`profile`).
    """

    model_config = ConfigDict(frozen=True, extra="allow", coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    username: str
    email: str | None = None
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    @property
    def profile(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


@dataclass(frozen=True, slots=True)
class AuthGrant:
    token: str
    principal: Principal


# --- Module Notes -----------------------------------------------------------
# The client never decodes the token; identity always comes from the server payload.
