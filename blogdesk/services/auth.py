from __future__ import annotations

from typing import Callable, Tuple

import structlog
from blinker import Namespace
from flask import current_app, session
from flask_login import login_user, logout_user

from blogdesk.models.session import AdminSession
from blogdesk.utils.http_client import RemoteError, current_store

log = structlog.get_logger(__name__)

_signals = Namespace()
session_changed = _signals.signal("session-changed")

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"

SESSION_KEY = "auth_session"


def on_auth_state_change(
    callback: Callable[[str, AdminSession | None], None], app=None
) -> Callable[[], None]:
    """Subscribe ``callback(event, session)`` to session changes.

    When ``app`` is given only changes raised inside that application are
    delivered. Returns a function that removes the subscription.
    """
    def receiver(sender, event: str, session: AdminSession | None = None, **_):
        callback(event, session)

    if app is not None:
        session_changed.connect(receiver, sender=app, weak=False)
    else:
        session_changed.connect(receiver, weak=False)
    return lambda: session_changed.disconnect(receiver)


def _emit(event: str, admin: AdminSession | None) -> None:
    log.info("session_changed", auth_event=event, user_id=getattr(admin, "user_id", None))
    session_changed.send(current_app._get_current_object(), event=event, session=admin)


def stored_session() -> AdminSession | None:
    return AdminSession.from_dict(session.get(SESSION_KEY))


def _store(admin: AdminSession) -> None:
    session[SESSION_KEY] = admin.to_dict()
    session.permanent = True
    login_user(admin, remember=False)


def _clear() -> None:
    session.pop(SESSION_KEY, None)
    logout_user()


def sign_in(email: str, password: str) -> Tuple[AdminSession | None, str | None]:
    """
    Exchange credentials for a provider session.
    Returns (session, error_message) tuple.
    """
    try:
        payload = current_store().sign_in_with_password((email or "").strip(), password)
    except RemoteError as e:
        if e.status_code is not None and 400 <= e.status_code < 500:
            log.info("sign_in_rejected", status=e.status_code)
            return None, e.message or "Invalid login credentials"
        log.error("sign_in_failed", error=e.message)
        return None, "Failed to sign in"

    try:
        admin = AdminSession.from_token_response(payload or {})
    except KeyError:
        log.error("sign_in_failed", error="token response without access_token")
        return None, "Failed to sign in"
    if not admin.user_id:
        log.error("sign_in_failed", error="token response without user id")
        return None, "Failed to sign in"

    _store(admin)
    _emit(SIGNED_IN, admin)
    return admin, None


def get_session() -> AdminSession | None:
    """Ask the provider whether the stored session is still good.

    A rejected access token gets one refresh attempt. Anything else that
    goes wrong leaves the admin signed out.
    """
    admin = stored_session()
    if admin is None:
        return None

    store = current_store()
    try:
        store.get_user(admin.access_token)
        return admin
    except RemoteError as e:
        log.info("session_rejected", status=e.status_code, error=e.message)
        if admin.refresh_token and e.status_code in (401, 403):
            try:
                refreshed = AdminSession.from_token_response(store.refresh_session(admin.refresh_token) or {})
            except (RemoteError, KeyError) as refresh_error:
                log.info("session_refresh_failed", error=str(refresh_error))
            else:
                if not refreshed.user_id:
                    refreshed.user_id = admin.user_id
                    refreshed.email = refreshed.email or admin.email
                _store(refreshed)
                _emit(TOKEN_REFRESHED, refreshed)
                return refreshed

    _clear()
    _emit(SIGNED_OUT, admin)
    return None


def sign_out() -> bool:
    """End the provider session. Returns False when the provider refused."""
    admin = stored_session()
    if admin is not None:
        try:
            current_store().sign_out(admin.access_token)
        except RemoteError as e:
            # An already-expired token means the provider session is gone anyway
            if e.status_code not in (401, 403):
                log.warning("sign_out_failed", status=e.status_code, error=e.message)
                return False
    _clear()
    if admin is not None:
        _emit(SIGNED_OUT, admin)
    return True


def load_admin(user_id: str) -> AdminSession | None:
    """Flask-Login loader: the stored session, if it belongs to ``user_id``."""
    admin = stored_session()
    if admin is None or admin.user_id != user_id:
        return None
    return admin
