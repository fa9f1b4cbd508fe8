"""Collaborator contracts consumed by the resolver."""

from typing import Protocol
from config.constants import Role
from profiles.models import ProfileRecord, Session


class IdentityProvider(Protocol):
    async def get_current_user(self) -> Session | None:
        """Return the authenticated session, or None when there is none."""
        ...


class ProfileStore(Protocol):
    async def exists(self, role: Role, user_id: str) -> bool:
        ...

    async def fetch(self, role: Role, user_id: str) -> ProfileRecord | None:
        ...
