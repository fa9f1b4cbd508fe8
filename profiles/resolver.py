"""Profile existence routing.

Decides, for a role, an intent and the current session, whether the visitor
is sent to login, to the new or edit page, or shown the form. The same code
path serves every role; the store maps the role to its table.
"""

import structlog
from config.constants import Intent, Role
from profiles.models import (
    RedirectToEdit,
    RedirectToLogin,
    RedirectToNew,
    RenderForm,
    RenderProfile,
    RouteDecision,
    Session,
)
from profiles.protocols import IdentityProvider, ProfileStore

log = structlog.get_logger(__name__)


async def resolve(
    role: Role,
    intent: Intent,
    session: Session | None,
    store: ProfileStore,
) -> RouteDecision:
    """Compute the route decision. Store failures propagate unchanged."""
    if session is None:
        decision: RouteDecision = RedirectToLogin(role)
    elif intent is Intent.NEW:
        if await store.exists(role, session.user_id):
            decision = RedirectToEdit(role)
        else:
            decision = RenderForm(role)
    else:
        profile = await store.fetch(role, session.user_id)
        if profile is None:
            decision = RedirectToNew(role)
        elif intent is Intent.EDIT:
            decision = RenderForm(role, profile)
        else:
            decision = RenderProfile(role, profile)

    log.debug(
        "profile_route_resolved",
        role=role.value,
        intent=intent.value,
        decision=type(decision).__name__,
    )
    return decision


async def resolve_request(
    role: Role,
    intent: Intent,
    identity: IdentityProvider,
    store: ProfileStore,
) -> RouteDecision:
    """Fetch the current identity, then resolve against the store."""
    session = await identity.get_current_user()
    return await resolve(role, intent, session, store)
