"""Client and provider profile pages.

One set of handlers serves both roles; the role comes from the URL and is
passed straight through to the resolver.
"""

import structlog
from pydantic import ValidationError
from quart import Blueprint, current_app, redirect, request, url_for
from config.constants import Intent, Role
from profiles.errors import ProfileExists
from profiles.forms import form_errors, parse_profile_form
from profiles.models import (
    RedirectToEdit,
    RedirectToLogin,
    RedirectToNew,
    RenderForm,
    RenderProfile,
    RouteDecision,
    Session,
)
from profiles.resolver import resolve, resolve_request

log = structlog.get_logger(__name__)

profiles_bp = Blueprint("profiles", __name__)

ROLE = "<any(client, provider):role>"


def _redirect_for(decision: RouteDecision):
    """Translate a redirect decision into a response, or None to render."""
    if isinstance(decision, RedirectToLogin):
        return redirect(url_for("auth.login"))
    if isinstance(decision, RedirectToNew):
        return redirect(url_for("profiles.new_profile", role=decision.role.value))
    if isinstance(decision, RedirectToEdit):
        return redirect(url_for("profiles.edit_profile", role=decision.role.value))
    return None


async def _render(decision: RouteDecision):
    response = _redirect_for(decision)
    if response is not None:
        return response
    renderer = current_app.form_renderer  # type: ignore[attr-defined]
    if isinstance(decision, RenderProfile):
        return await renderer.render_profile(decision.role, decision.profile)
    return await renderer.render(decision.role, decision.profile)


async def _page(role: str, intent: Intent):
    decision = await resolve_request(
        Role(role),
        intent,
        current_app.identity,  # type: ignore[attr-defined]
        current_app.profile_store,  # type: ignore[attr-defined]
    )
    return await _render(decision)


async def _submit(role: Role, intent: Intent):
    """Re-resolve for the submitting user, then validate and persist."""
    store = current_app.profile_store  # type: ignore[attr-defined]
    session: Session | None = await current_app.identity.get_current_user()  # type: ignore[attr-defined]
    decision = await resolve(role, intent, session, store)
    if not isinstance(decision, RenderForm) or session is None:
        return _redirect_for(decision)

    form = (await request.form).to_dict()
    try:
        fields = parse_profile_form(role, form)
    except ValidationError as e:
        renderer = current_app.form_renderer  # type: ignore[attr-defined]
        return await renderer.render(role, decision.profile, values=form, errors=form_errors(e)), 400

    if intent is Intent.NEW:
        try:
            await store.create(role, session.user_id, fields)
        except ProfileExists:
            log.info("profile_create_conflict", role=role.value, user_id=session.user_id)
            return redirect(url_for("profiles.edit_profile", role=role.value))
    elif await store.update(role, session.user_id, fields) is None:
        return redirect(url_for("profiles.new_profile", role=role.value))

    return redirect(url_for("profiles.view_profile", role=role.value))


@profiles_bp.route(f"/{ROLE}/profile")
async def view_profile(role: str):
    return await _page(role, Intent.VIEW)


@profiles_bp.route(f"/{ROLE}/profile/new", methods=["GET", "POST"])
async def new_profile(role: str):
    if request.method == "POST":
        return await _submit(Role(role), Intent.NEW)
    return await _page(role, Intent.NEW)


@profiles_bp.route(f"/{ROLE}/profile/edit", methods=["GET", "POST"])
async def edit_profile(role: str):
    if request.method == "POST":
        return await _submit(Role(role), Intent.EDIT)
    return await _page(role, Intent.EDIT)
