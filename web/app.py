"""Quart app factory with Supabase auth and profile routes."""

import structlog
from quart import Quart, redirect, render_template, request, session, url_for
from config.constants import SESSION_USER_KEY
from config.settings import settings
from profiles.errors import ProfileError

log = structlog.get_logger(__name__)


def create_app(identity=None, profile_store=None, auth_client=None, form_renderer=None) -> Quart:
    """Create and configure the web application.

    Collaborators are injected so tests can run without Postgres or the
    auth server. Anything left as None is built from settings; the
    profile store is created once the app starts serving.
    """
    from auth.identity import SessionIdentityProvider
    from auth.supabase_client import SupabaseAuthClient
    from web.forms import FormRenderer

    app = Quart(
        __name__,
        template_folder="templates",
        static_folder="static",
    )
    app.secret_key = settings.web_secret_key

    auth_client = auth_client or SupabaseAuthClient()

    # Store references for routes
    app.auth_client = auth_client  # type: ignore[attr-defined]
    app.identity = identity or SessionIdentityProvider(auth_client)  # type: ignore[attr-defined]
    app.profile_store = profile_store  # type: ignore[attr-defined]
    app.form_renderer = form_renderer or FormRenderer()  # type: ignore[attr-defined]

    # Register blueprints
    from web.auth import auth_bp
    from web.routes.profiles import profiles_bp

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(profiles_bp)

    @app.before_serving
    async def startup() -> None:
        if app.profile_store is None:  # type: ignore[attr-defined]
            from storage.database import get_pool
            from storage.repositories.profile_repo import ProfileRepository

            pool = await get_pool()
            app.profile_store = ProfileRepository(pool)  # type: ignore[attr-defined]

    @app.after_serving
    async def shutdown() -> None:
        from storage.database import close_pool

        await auth_client.close()
        await close_pool()

    @app.errorhandler(ProfileError)
    async def profile_error(error: ProfileError):
        log.error("request_failed", path=request.path, error=type(error).__name__)
        return await render_template("error.html"), 503

    @app.route("/")
    async def index():
        if SESSION_USER_KEY not in session:
            return redirect(url_for("auth.login"))
        return await render_template("index.html", user=session[SESSION_USER_KEY])

    @app.route("/health")
    async def health():
        return {"status": "ok"}, 200

    return app


async def start_web() -> None:
    """Start the web server."""
    app = create_app()
    log.info("starting_web", host=settings.web_host, port=settings.web_port)
    await app.run_task(host=settings.web_host, port=settings.web_port)
