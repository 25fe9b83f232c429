from __future__ import annotations

import logging
import os
from datetime import timedelta
from typing import Any, Dict

import click
from flask import Flask, g, jsonify, request

from blogdesk.config import Config
from blogdesk.extensions import cache, csrf, limiter, login_manager, remote
from blogdesk.logging_config import configure_logging
from blogdesk.security import apply_security_headers
from blogdesk.utils.http_client import RemoteError, current_store

PROCESS_LOCAL_CACHES = ("SimpleCache", "simple", "NullCache", "null")


def create_app(config_overrides: Dict[str, Any] | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=False)

    # Load config
    app.config.from_object(Config())
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(logging.DEBUG if app.config.get("DEBUG") else logging.INFO)
    app.permanent_session_lifetime = timedelta(minutes=int(app.config.get("SESSION_LIFETIME_MINUTES", 60)))

    # Dashboard lists and operation tags must be visible to every worker
    workers = int(app.config.get("WEB_CONCURRENCY", 1))
    if workers > 1 and app.config.get("CACHE_TYPE") in PROCESS_LOCAL_CACHES:
        raise RuntimeError(
            f"CACHE_TYPE={app.config['CACHE_TYPE']} is per process and cannot serve {workers} workers; "
            "use FileSystemCache or RedisCache"
        )

    # Init extensions
    remote.init_app(app)
    login_manager.init_app(app)
    csrf.init_app(app)
    cache.init_app(app)
    limiter.init_app(app)

    from blogdesk.services import auth as auth_svc
    from blogdesk.services import dashboard

    @login_manager.user_loader
    def load_user(user_id: str):
        return auth_svc.load_admin(user_id)

    login_manager.login_view = "auth.login"
    login_manager.login_message = "Please sign in to access the dashboard."
    login_manager.login_message_category = "info"

    # Cached dashboard lists belong to one provider session
    def drop_cached_lists(event: str, admin) -> None:
        if admin is not None and event in (auth_svc.SIGNED_IN, auth_svc.SIGNED_OUT):
            dashboard.invalidate(admin.user_id)

    auth_svc.on_auth_state_change(drop_cached_lists, app=app)

    @app.context_processor
    def template_context() -> dict:
        from blogdesk.forms import LogoutForm

        return {
            "site_name": app.config.get("SITE_NAME", "Admin Dashboard"),
            "logout_form": LogoutForm(),
        }

    @app.before_request
    def add_request_context() -> None:
        g.request_id = request.headers.get("X-Request-ID") or os.urandom(8).hex()

    @app.after_request
    def set_headers(resp):
        return apply_security_headers(resp)

    # Blueprints
    from blogdesk.blueprints.gate import bp as gate_bp
    from blogdesk.blueprints.auth import bp as auth_bp
    from blogdesk.blueprints.admin import bp as admin_bp
    from blogdesk.blueprints.api.admin.dashboard import bp as admin_api_bp

    app.register_blueprint(gate_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(admin_api_bp, url_prefix="/admin/api")

    # Health route
    @app.get("/health")
    def health():
        try:
            current_store().health()
            backend = "connected"
        except RemoteError:
            backend = "error"
        return jsonify({"status": "ok", "backend": backend}), 200

    # Error handlers
    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"error": "bad_request", "message": str(e)}), 400

    @app.errorhandler(401)
    def unauthorized(e):
        return jsonify({"error": "unauthorized", "message": str(e)}), 401

    @app.errorhandler(403)
    def forbidden(e):
        return jsonify({"error": "forbidden", "message": str(e)}), 403

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "not_found", "message": "resource not found"}), 404

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify({"error": "rate_limited", "message": "too many requests"}), 429

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "server_error", "message": "internal server error"}), 500

    # CLI: check the hosted backend is reachable
    @app.cli.command("check-backend")
    def check_backend() -> None:
        click.echo(f"Backend: {getattr(current_store(), 'base_url', 'unknown')}")
        try:
            info = current_store().health()
        except RemoteError as e:
            click.echo(f"Auth gateway unreachable: {e.message}", err=True)
            raise SystemExit(1)
        name = info.get("name") or "auth gateway"
        version = info.get("version") or "unknown version"
        click.echo(f"Auth gateway OK ({name}, {version})")

    return app
