from __future__ import annotations

from flask import flash, redirect, url_for

from blogdesk.forms.auth import LogoutForm
from blogdesk.services import auth as auth_svc

from blogdesk.blueprints.auth import bp


@bp.post("/logout")
def logout():
    form = LogoutForm()
    if not form.validate_on_submit():
        flash("Invalid logout request.", "error")
        return redirect(url_for("admin.dashboard"))

    if not auth_svc.sign_out():
        flash("Failed to logout", "error")
        return redirect(url_for("admin.dashboard"))

    flash("You have been logged out.", "info")
    return redirect(url_for("gate.index"))
