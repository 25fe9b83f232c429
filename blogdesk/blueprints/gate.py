from __future__ import annotations

from flask import Blueprint, redirect, render_template, url_for

from blogdesk.forms import LoginForm
from blogdesk.services import auth as auth_svc

bp = Blueprint("gate", __name__)


@bp.get("/")
def index():
    """Dashboard for a live provider session, login form otherwise."""
    if auth_svc.get_session() is None:
        return render_template("auth/login.html", form=LoginForm())
    return redirect(url_for("admin.dashboard"))
