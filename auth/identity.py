"""Identity provider backed by the Quart session cookie."""

import structlog
from quart import session
from typing import Any
from auth.supabase_client import SupabaseAuthClient
from config.constants import SESSION_REFRESH_KEY, SESSION_TOKEN_KEY, SESSION_USER_KEY
from profiles.errors import AuthRejected
from profiles.models import Session

log = structlog.get_logger(__name__)


def store_tokens(token_data: dict[str, Any]) -> None:
    """Persist a token grant response in the session cookie."""
    user = token_data.get("user") or {}
    session[SESSION_TOKEN_KEY] = token_data["access_token"]
    session[SESSION_REFRESH_KEY] = token_data.get("refresh_token")
    session[SESSION_USER_KEY] = {"id": user.get("id"), "email": user.get("email")}


class SessionIdentityProvider:
    """Validates the session's access token against the auth server per request."""

    def __init__(self, client: SupabaseAuthClient) -> None:
        self.client = client

    async def get_current_user(self) -> Session | None:
        token = session.get(SESSION_TOKEN_KEY)
        if not token:
            return None

        try:
            user = await self.client.get_user(token)
        except AuthRejected:
            user = await self._refresh()
            if user is None:
                return None

        return Session(user_id=str(user["id"]), email=user.get("email"))

    async def _refresh(self) -> dict[str, Any] | None:
        refresh_token = session.get(SESSION_REFRESH_KEY)
        if refresh_token:
            try:
                token_data = await self.client.refresh(refresh_token)
            except AuthRejected:
                log.info("session_refresh_rejected")
            else:
                store_tokens(token_data)
                log.info("session_refreshed")
                user = token_data.get("user")
                if user:
                    return user
                try:
                    return await self.client.get_user(token_data["access_token"])
                except AuthRejected:
                    log.info("refreshed_token_rejected")

        log.info("session_expired")
        session.clear()
        return None
