"""
tests.fake_api

In-process stand-in for the remote InfoCast API.

Responsibilities:
- Implement the identity and broadcast endpoints the client consumes (JSON contracts,
  `x-auth-token` credential header, `{"message": ...}` error bodies).
- Mint/validate JWTs so expired and revoked credentials behave like the real server.
- Record requests and inject faults for error-path tests.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from fastapi import Body, Depends, FastAPI, Header, HTTPException
from fastapi.responses import JSONResponse
from jwt import InvalidTokenError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.status import (
    HTTP_201_CREATED,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
)

JWT_SECRET = "fake-api-secret"
JWT_ALG = "HS256"
JWT_ISSUER = "fake-infocast"


@dataclass(frozen=True, slots=True)
class RecordedRequest:
    method: str
    path: str
    token: str | None


@dataclass
class FakeState:
    users: dict[str, dict[str, Any]] = field(default_factory=dict)
    broadcasts: dict[str, dict[str, Any]] = field(default_factory=dict)
    revoked: set[str] = field(default_factory=set)
    requests: list[RecordedRequest] = field(default_factory=list)
    # (method, path) -> (status, body); consumed by the first matching request.
    faults: dict[tuple[str, str], tuple[int, dict[str, Any]]] = field(default_factory=dict)
    stats_override: dict[str, Any] | None = None

    def add_user(
        self,
        *,
        username: str,
        email: str,
        password: str,
        role: str = "user",
    ) -> dict[str, Any]:
        user_id = f"u{len(self.users) + 1}"
        user = {
            "id": user_id,
            "username": username,
            "email": email,
            "password": password,
            "role": role,
        }
        self.users[user_id] = user
        return user

    def issue_token(self, user_id: str, *, ttl: timedelta = timedelta(hours=1)) -> str:
        now = datetime.now(tz=UTC)
        payload = {
            "iss": JWT_ISSUER,
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALG)

    def revoke(self, token: str) -> None:
        self.revoked.add(token)

    def add_broadcast(self, *, creator: dict[str, Any], **fields: Any) -> dict[str, Any]:
        now = datetime.now(tz=UTC)
        broadcast = {
            "_id": uuid.uuid4().hex,
            "title": "Untitled",
            "message": "",
            "urgency": "medium",
            "type": "announcement",
            "tags": [],
            "expiryDate": None,
            "creator_id": creator["id"],
            "views": 0,
            "createdAt": now.isoformat(),
        }
        broadcast.update(fields)
        self.broadcasts[broadcast["_id"]] = broadcast
        return broadcast

    def paths(self) -> list[str]:
        return [f"{r.method} {r.path}" for r in self.requests]

    def public_user(self, user: dict[str, Any]) -> dict[str, Any]:
        return {k: v for k, v in user.items() if k != "password"}

    def public_broadcast(self, broadcast: dict[str, Any]) -> dict[str, Any]:
        out = {k: v for k, v in broadcast.items() if k != "creator_id"}
        creator = self.users.get(broadcast["creator_id"])
        out["createdBy"] = {
            "_id": broadcast["creator_id"],
            "username": creator["username"] if creator else None,
        }
        return out

    def is_active(self, broadcast: dict[str, Any]) -> bool:
        expiry = broadcast.get("expiryDate")
        if not expiry:
            return True
        return datetime.fromisoformat(str(expiry).replace("Z", "+00:00")) > datetime.now(tz=UTC)


def _count(n: int) -> list[dict[str, int]]:
    # Mirrors an aggregation `$count` stage: no documents -> empty list.
    return [{"count": n}] if n else []


def create_fake_app(state: FakeState) -> FastAPI:
    app = FastAPI(title="Fake InfoCast API")

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse({"success": False, "message": exc.detail}, status_code=exc.status_code)

    @app.middleware("http")
    async def _record(request: Request, call_next):
        state.requests.append(
            RecordedRequest(
                method=request.method,
                path=request.url.path,
                token=request.headers.get("x-auth-token"),
            )
        )
        fault = state.faults.pop((request.method, request.url.path), None)
        if fault is not None:
            status, body = fault
            return JSONResponse(body, status_code=status)
        return await call_next(request)

    def current_user(x_auth_token: str | None = Header(default=None)) -> dict[str, Any]:
        if not x_auth_token:
            raise HTTPException(HTTP_401_UNAUTHORIZED, "No token, authorization denied")
        if x_auth_token in state.revoked:
            raise HTTPException(HTTP_401_UNAUTHORIZED, "Token is not valid")
        try:
            payload = jwt.decode(
                x_auth_token,
                JWT_SECRET,
                algorithms=[JWT_ALG],
                issuer=JWT_ISSUER,
                options={"require": ["exp", "iat", "iss", "sub"]},
            )
        except InvalidTokenError as e:
            raise HTTPException(HTTP_401_UNAUTHORIZED, "Token is not valid") from e
        user = state.users.get(str(payload["sub"]))
        if user is None:
            raise HTTPException(HTTP_401_UNAUTHORIZED, "Token is not valid")
        return user

    def _grant(user: dict[str, Any]) -> dict[str, Any]:
        return {
            "success": True,
            "token": state.issue_token(user["id"]),
            "user": state.public_user(user),
        }

    # --- auth ----------------------------------------------------------------

    @app.post("/api/auth/register", status_code=HTTP_201_CREATED)
    async def register(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        username, email, password = (payload.get(k) for k in ("username", "email", "password"))
        if not username or not email or not password:
            raise HTTPException(HTTP_400_BAD_REQUEST, "Please provide username, email and password")
        if any(u["email"] == email for u in state.users.values()):
            raise HTTPException(HTTP_400_BAD_REQUEST, "User already exists")
        return _grant(state.add_user(username=username, email=email, password=password))

    @app.post("/api/auth/login")
    async def login(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        for user in state.users.values():
            if user["email"] == payload.get("email") and user["password"] == payload.get(
                "password"
            ):
                return _grant(user)
        raise HTTPException(HTTP_401_UNAUTHORIZED, "Invalid credentials")

    @app.get("/api/auth/me")
    async def me(user: dict[str, Any] = Depends(current_user)) -> dict[str, Any]:
        return {"success": True, "data": state.public_user(user)}

    @app.put("/api/auth/me")
    async def update_me(
        payload: dict[str, Any] = Body(...),
        user: dict[str, Any] = Depends(current_user),
    ) -> dict[str, Any]:
        if "username" in payload and not str(payload["username"]).strip():
            raise HTTPException(HTTP_400_BAD_REQUEST, "Username cannot be empty")
        for key, value in payload.items():
            if key in ("id", "role", "password"):
                continue
            user[key] = value
        return {"success": True, "data": state.public_user(user)}

    # --- broadcasts ----------------------------------------------------------

    @app.get("/api/broadcasts")
    async def list_broadcasts(
        limit: int = 20,
        status: str | None = None,
        urgency: str | None = None,
        type: str | None = None,
        tag: str | None = None,
        search: str | None = None,
    ) -> dict[str, Any]:
        items = sorted(state.broadcasts.values(), key=lambda b: b["createdAt"], reverse=True)
        if status == "active":
            items = [b for b in items if state.is_active(b)]
        elif status == "expired":
            items = [b for b in items if not state.is_active(b)]
        if urgency:
            items = [b for b in items if b["urgency"] == urgency]
        if type:
            items = [b for b in items if b["type"] == type]
        if tag:
            items = [b for b in items if tag in b["tags"]]
        if search:
            needle = search.lower()
            items = [
                b for b in items if needle in b["title"].lower() or needle in b["message"].lower()
            ]
        return {"success": True, "data": [state.public_broadcast(b) for b in items[:limit]]}

    @app.get("/api/broadcasts/stats/summary")
    async def stats_summary() -> dict[str, Any]:
        if state.stats_override is not None:
            return {"success": True, "data": state.stats_override}
        items = list(state.broadcasts.values())
        by_urgency: dict[str, int] = {}
        for b in items:
            by_urgency[b["urgency"]] = by_urgency.get(b["urgency"], 0) + 1
        return {
            "success": True,
            "data": {
                "totalBroadcasts": _count(len(items)),
                "activeBroadcasts": _count(sum(1 for b in items if state.is_active(b))),
                "byUrgency": [{"_id": k, "count": v} for k, v in by_urgency.items()],
            },
        }

    def _find(broadcast_id: str) -> dict[str, Any]:
        broadcast = state.broadcasts.get(broadcast_id)
        if broadcast is None:
            raise HTTPException(HTTP_404_NOT_FOUND, "Broadcast not found")
        return broadcast

    def _ensure_owner(broadcast: dict[str, Any], user: dict[str, Any], verb: str) -> None:
        if broadcast["creator_id"] != user["id"] and user["role"] != "admin":
            raise HTTPException(HTTP_403_FORBIDDEN, f"Not authorized to {verb} this broadcast")

    @app.get("/api/broadcasts/{broadcast_id}")
    async def get_broadcast(broadcast_id: str) -> dict[str, Any]:
        broadcast = _find(broadcast_id)
        broadcast["views"] += 1
        return {"success": True, "data": state.public_broadcast(broadcast)}

    @app.post("/api/broadcasts", status_code=HTTP_201_CREATED)
    async def create_broadcast(
        payload: dict[str, Any] = Body(...),
        user: dict[str, Any] = Depends(current_user),
    ) -> dict[str, Any]:
        if not payload.get("title") or not payload.get("message"):
            raise HTTPException(HTTP_400_BAD_REQUEST, "Title and message are required")
        fields = {
            k: payload[k]
            for k in ("title", "message", "urgency", "type", "tags", "expiryDate")
            if k in payload
        }
        broadcast = state.add_broadcast(creator=user, **fields)
        return {"success": True, "data": state.public_broadcast(broadcast)}

    @app.put("/api/broadcasts/{broadcast_id}")
    async def update_broadcast(
        broadcast_id: str,
        payload: dict[str, Any] = Body(...),
        user: dict[str, Any] = Depends(current_user),
    ) -> dict[str, Any]:
        broadcast = _find(broadcast_id)
        _ensure_owner(broadcast, user, "update")
        for key in ("title", "message", "urgency", "type", "tags", "expiryDate"):
            if key in payload:
                broadcast[key] = payload[key]
        return {"success": True, "data": state.public_broadcast(broadcast)}

    @app.delete("/api/broadcasts/{broadcast_id}")
    async def delete_broadcast(
        broadcast_id: str,
        user: dict[str, Any] = Depends(current_user),
    ) -> dict[str, Any]:
        broadcast = _find(broadcast_id)
        _ensure_owner(broadcast, user, "delete")
        del state.broadcasts[broadcast_id]
        return {"success": True, "data": {}}

    return app


# --- Module Notes -----------------------------------------------------------
# Used through `httpx.ASGITransport`; nothing here listens on a socket.
