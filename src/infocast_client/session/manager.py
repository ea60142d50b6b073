"""
infocast_client.session.manager

Session manager: owner of the credential and the current principal.

Responsibilities:
- Restore a persisted session at startup (silently dropping a rejected credential).
- Acquire a credential via login/registration, release it via logout.
- Update the current principal's profile.
- Keep principal, persisted credential and the transport auth header consistent.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from infocast_client.auth.credentials import CredentialStore
from infocast_client.auth.models import AuthGrant, Principal
from infocast_client.clients.auth_api import AuthApi
from infocast_client.clients.errors import ApiError
from infocast_client.clients.transport import CredentialedHttp
from infocast_client.notifications import Notifier, error, success
from infocast_client.observability.logging import get_logger
from infocast_client.results import ErrorInfo, OperationResult

log = get_logger(__name__)


class SessionManager:
    """
    Explicit session context, built once per client and passed by reference.

    Invariant: `principal` is non-null only while a credential is held, persisted
    and attached to the transport. `loading` stays True until `init()` finishes.
    """

    def __init__(
        self,
        *,
        auth_api: AuthApi,
        http: CredentialedHttp,
        store: CredentialStore,
        notifier: Notifier,
    ) -> None:
        self._auth = auth_api
        self._http = http
        self._store = store
        self._notifier = notifier

        self._token: str | None = None
        self._principal: Principal | None = None
        self._loading = True

    @property
    def principal(self) -> Principal | None:
        return self._principal

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def is_authenticated(self) -> bool:
        return self._principal is not None

    async def init(self) -> Principal | None:
        # Startup: the persisted credential is read exactly once, here.
        try:
            self._token = await self._store.load()
        except SQLAlchemyError as e:
            log.warning("credential_load_failed", error=str(e))
            self._token = None
        if self._token:
            self._http.apply_credential(self._token)
        return await self.restore_session()

    async def restore_session(self) -> Principal | None:
        if not self._token:
            self._loading = False
            return None

        self._http.apply_credential(self._token)
        try:
            principal = await self._auth.me()
        except ApiError as e:
            # Expected expiry, not a user action: no notification.
            log.info("session_restore_rejected", status=e.status_code, error=str(e))
            await self.invalidate()
            return None
        finally:
            self._loading = False

        self._principal = principal
        log.info("session_restored", user_id=principal.id)
        return principal

    async def login(self, credentials: Mapping[str, Any]) -> OperationResult[Principal]:
        return await self._acquire(
            lambda: self._auth.login(credentials=credentials),
            action="login",
            success_message="Login successful!",
            fallback="Login failed",
        )

    async def register(self, user_data: Mapping[str, Any]) -> OperationResult[Principal]:
        return await self._acquire(
            lambda: self._auth.register(user_data=user_data),
            action="register",
            success_message="Registration successful!",
            fallback="Registration failed",
        )

    async def logout(self) -> OperationResult[None]:
        await self._release()
        log.info("logout")
        success(self._notifier, "Logged out successfully")
        return OperationResult.ok()

    async def update_profile(self, updates: Mapping[str, Any]) -> OperationResult[Principal]:
        if self._principal is None:
            message = "Please login to update your profile"
            error(self._notifier, message)
            return OperationResult.failed(ErrorInfo(message=message))

        try:
            principal = await self._auth.update_me(updates=updates)
        except ApiError as e:
            log.warning("profile_update_failed", status=e.status_code, error=str(e))
            return self._fail(e, fallback="Update failed")

        self._principal = principal
        success(self._notifier, "Profile updated successfully")
        return OperationResult.ok(principal)

    async def invalidate(self) -> None:
        """
        Drop a credential the server rejected. Silent; callers decide what to report.
        """

        await self._release()
        log.info("session_invalidated")

    async def _acquire(
        self,
        call: Callable[[], Awaitable[AuthGrant]],
        *,
        action: str,
        success_message: str,
        fallback: str,
    ) -> OperationResult[Principal]:
        try:
            grant = await call()
        except ApiError as e:
            log.warning(f"{action}_failed", status=e.status_code, error=str(e))
            return self._fail(e, fallback=fallback)

        try:
            await self._store.save(grant.token)
        except SQLAlchemyError as e:
            # Not persisted means not acquired; in-memory state is untouched.
            log.warning(f"{action}_persist_failed", error=str(e))
            error(self._notifier, fallback)
            return OperationResult.failed(ErrorInfo(message=fallback))

        # Token, header and principal change together, with no suspension point between.
        self._token = grant.token
        self._http.apply_credential(grant.token)
        self._principal = grant.principal

        log.info(f"{action}_succeeded", user_id=grant.principal.id)
        success(self._notifier, success_message)
        return OperationResult.ok(grant.principal)

    async def _release(self) -> None:
        self._principal = None
        self._token = None
        self._http.clear_credential()
        try:
            await self._store.remove()
        except SQLAlchemyError as e:
            log.warning("credential_remove_failed", error=str(e))

    def _fail(self, e: ApiError, *, fallback: str) -> OperationResult[Any]:
        info = ErrorInfo.from_api_error(e, fallback=fallback)
        error(self._notifier, info.message)
        return OperationResult.failed(info)


# --- Module Notes -----------------------------------------------------------
# `services.broadcast_service` calls `invalidate()` when a mutation is rejected with 401.
