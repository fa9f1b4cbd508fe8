"""Login, signup and logout against Supabase Auth."""

import structlog
from quart import Blueprint, current_app, redirect, render_template, request, session, url_for
from auth.identity import store_tokens
from config.constants import SESSION_TOKEN_KEY, SESSION_USER_KEY
from profiles.errors import AuthRejected

log = structlog.get_logger(__name__)

auth_bp = Blueprint("auth", __name__)


async def _credentials() -> tuple[str, str]:
    form = await request.form
    return form.get("email", "").strip(), form.get("password", "")


@auth_bp.route("/login", methods=["GET", "POST"])
async def login():
    if request.method == "GET":
        return await render_template("login.html")

    email, password = await _credentials()
    if not email or not password:
        return await render_template("login.html", email=email, error="Email and password are required"), 400

    try:
        token_data = await current_app.auth_client.sign_in(email, password)  # type: ignore[attr-defined]
    except AuthRejected as e:
        log.info("login_rejected", status=e.status)
        return await render_template("login.html", email=email, error=str(e)), 401

    store_tokens(token_data)
    log.info("user_logged_in", user_id=session[SESSION_USER_KEY]["id"])
    return redirect(url_for("index"))


@auth_bp.route("/signup", methods=["GET", "POST"])
async def signup():
    if request.method == "GET":
        return await render_template("signup.html")

    email, password = await _credentials()
    if not email or not password:
        return await render_template("signup.html", email=email, error="Email and password are required"), 400

    try:
        data = await current_app.auth_client.sign_up(email, password)  # type: ignore[attr-defined]
    except AuthRejected as e:
        log.info("signup_rejected", status=e.status)
        return await render_template("signup.html", email=email, error=str(e)), 400

    # Projects with email confirmation disabled return a session right away
    if data.get("access_token"):
        store_tokens(data)
        return redirect(url_for("index"))
    return await render_template("signup_success.html", email=email)


@auth_bp.route("/logout", methods=["POST"])
async def logout():
    token = session.get(SESSION_TOKEN_KEY)
    if token:
        try:
            await current_app.auth_client.sign_out(token)  # type: ignore[attr-defined]
        except AuthRejected:
            log.info("logout_token_already_invalid")
    session.clear()
    return redirect(url_for("auth.login"))
