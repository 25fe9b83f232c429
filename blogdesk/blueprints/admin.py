from __future__ import annotations

from flask import Blueprint, flash, redirect, url_for
from flask_login import current_user

from blogdesk.models.session import AdminSession
from blogdesk.services.dashboard import Outcome

bp = Blueprint("admin", __name__)

TABS = ("posts", "comments", "analytics", "categories")


def current_admin() -> AdminSession:
    return current_user._get_current_object()


def flash_outcome(outcome: Outcome) -> None:
    flash(outcome.message, "success")
    for error in outcome.errors:
        flash(error, "error")


def back_to(tab: str, **params):
    return redirect(url_for("admin.dashboard", tab=tab, **params))


import blogdesk.blueprints.view.admin  # noqa: E402,F401
