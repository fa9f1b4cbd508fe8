"""Session and route decision types."""

from dataclasses import dataclass
from typing import Any
from config.constants import Role

ProfileRecord = dict[str, Any]


@dataclass(frozen=True)
class Session:
    """Authenticated identity of the current request."""
    user_id: str
    email: str | None = None


@dataclass(frozen=True)
class RedirectToLogin:
    role: Role


@dataclass(frozen=True)
class RedirectToNew:
    role: Role


@dataclass(frozen=True)
class RedirectToEdit:
    role: Role


@dataclass(frozen=True)
class RenderForm:
    role: Role
    profile: ProfileRecord | None = None


@dataclass(frozen=True)
class RenderProfile:
    role: Role
    profile: ProfileRecord


RouteDecision = RedirectToLogin | RedirectToNew | RedirectToEdit | RenderForm | RenderProfile
