"""Supabase Auth (GoTrue) REST client."""

import aiohttp
import structlog
from typing import Any
from config.settings import settings
from profiles.errors import AuthRejected, IdentityUnavailable

log = structlog.get_logger(__name__)

# Statuses GoTrue uses for bad credentials, bad tokens and invalid input
_REJECTED_STATUSES = (400, 401, 403, 422)


def _error_message(payload: Any, status: int) -> str:
    if isinstance(payload, dict):
        for key in ("error_description", "msg", "message", "error"):
            if payload.get(key):
                return str(payload[key])
    return f"HTTP {status}"


class SupabaseAuthClient:
    """Thin async wrapper over the hosted auth API."""

    def __init__(
        self,
        base_url: str | None = None,
        anon_key: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = (base_url or settings.supabase_url).rstrip("/")
        self.anon_key = anon_key or settings.supabase_anon_key
        self.timeout = timeout or settings.auth_timeout_seconds
        self._session: aiohttp.ClientSession | None = None

    async def get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout),
                headers={"apikey": self.anon_key, "User-Agent": "ConnectPro/0.1"},
            )
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        token: str | None = None,
    ) -> dict[str, Any]:
        """Call the auth API. Raises AuthRejected or IdentityUnavailable."""
        url = f"{self.base_url}/auth/v1{path}"
        headers = {"Authorization": f"Bearer {token}"} if token else None
        session = await self.get_session()
        try:
            async with session.request(method, url, json=json, params=params, headers=headers) as resp:
                if resp.status == 204:
                    return {}
                # Gateway errors often carry HTML bodies
                if resp.status >= 400 and resp.status not in _REJECTED_STATUSES:
                    log.warning("auth_server_error", path=path, status=resp.status)
                    raise IdentityUnavailable(f"auth server returned HTTP {resp.status}")
                payload = await resp.json(content_type=None)
                if resp.status in _REJECTED_STATUSES:
                    raise AuthRejected(resp.status, _error_message(payload, resp.status))
                return payload or {}
        except (aiohttp.ClientError, TimeoutError, ValueError) as e:
            log.error("auth_request_failed", path=path, error=str(e))
            raise IdentityUnavailable("auth server unreachable") from e

    async def sign_in(self, email: str, password: str) -> dict[str, Any]:
        """Password grant. Returns access_token, refresh_token and user."""
        return await self._request(
            "POST", "/token", params={"grant_type": "password"},
            json={"email": email, "password": password},
        )

    async def refresh(self, refresh_token: str) -> dict[str, Any]:
        return await self._request(
            "POST", "/token", params={"grant_type": "refresh_token"},
            json={"refresh_token": refresh_token},
        )

    async def sign_up(self, email: str, password: str) -> dict[str, Any]:
        return await self._request("POST", "/signup", json={"email": email, "password": password})

    async def get_user(self, access_token: str) -> dict[str, Any]:
        return await self._request("GET", "/user", token=access_token)

    async def sign_out(self, access_token: str) -> None:
        await self._request("POST", "/logout", token=access_token)
