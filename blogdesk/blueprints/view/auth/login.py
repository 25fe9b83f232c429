from __future__ import annotations

from flask import flash, redirect, render_template, url_for
from flask_login import current_user

from blogdesk.extensions import limiter
from blogdesk.forms.auth import LoginForm
from blogdesk.services import auth as auth_svc

from blogdesk.blueprints.auth import bp


@bp.route("/login", methods=["GET", "POST"])
@limiter.limit("5 per minute; 20 per hour", methods=["POST"])
def login():
    if current_user.is_authenticated:
        return redirect(url_for("admin.dashboard"))

    form = LoginForm()
    if form.validate_on_submit():
        admin, error_message = auth_svc.sign_in(form.email.data, form.password.data)
        if not admin:
            flash(error_message or "Invalid login credentials", "error")
            return render_template("auth/login.html", form=form)
        return redirect(url_for("admin.dashboard"))

    return render_template("auth/login.html", form=form)
