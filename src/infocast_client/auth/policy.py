"""
infocast_client.auth.policy

Client-side mirror of the server's broadcast mutation policy.

Responsibilities:
- Decide whether edit/delete affordances are shown for a broadcast.
"""

from __future__ import annotations

from infocast_client.auth.models import Principal
from infocast_client.domain.broadcast import Broadcast


def can_mutate(principal: Principal | None, broadcast: Broadcast) -> bool:
    # Authz (advisory): creator or admin. The server re-checks every mutation.
    if principal is None:
        return False
    if principal.is_admin:
        return True
    creator = broadcast.created_by
    return creator is not None and creator.id == principal.id


# --- Module Notes -----------------------------------------------------------
# A 403 on a mutation this predicate allowed (e.g. a role changed concurrently) is handled
# by `services.broadcast_service` as an ordinary failure.
