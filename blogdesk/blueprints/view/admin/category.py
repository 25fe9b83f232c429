from __future__ import annotations

from flask import flash, render_template, url_for

from blogdesk.decorators import admin_required
from blogdesk.errors import ConsoleError
from blogdesk.extensions import limiter
from blogdesk.forms.categories import CategoryForm, DeleteCategoryForm, RenameCategoryForm
from blogdesk.services import categories as categories_svc
from blogdesk.services import dashboard as dash
from blogdesk.utils.http_client import RemoteError

from blogdesk.blueprints.admin import back_to, bp, current_admin, flash_outcome


@bp.post("/categories")
@admin_required
@limiter.limit("30 per minute")
def category_add():
    form = CategoryForm()
    if not form.validate_on_submit():
        flash("Invalid category request.", "error")
        return back_to("categories")
    try:
        outcome = categories_svc.add_category(current_admin(), form.name.data)
    except ConsoleError as e:
        flash(e.message, "error")
    else:
        flash_outcome(outcome)
    return back_to("categories")


@bp.route("/categories/<int:category_id>/rename", methods=["GET", "POST"])
@admin_required
@limiter.limit("30 per minute", methods=["POST"])
def category_rename(category_id: int):
    admin = current_admin()
    try:
        categories = dash.cached_list(admin, dash.CATEGORIES)
    except RemoteError:
        flash(dash.FETCH_ERRORS[dash.CATEGORIES], "error")
        return back_to("categories")
    category = next((c for c in categories if c.id == category_id), None)
    if category is None:
        flash("Category not found", "error")
        return back_to("categories")

    form = RenameCategoryForm(obj=category)
    if form.validate_on_submit():
        try:
            outcome = categories_svc.rename_category(admin, category_id, form.name.data)
        except ConsoleError as e:
            flash(e.message, "error")
        else:
            flash_outcome(outcome)
            return back_to("categories")

    return render_template(
        "admin/category_form.html",
        form=form,
        category=category,
        action_url=url_for("admin.category_rename", category_id=category_id),
    )


@bp.post("/categories/<int:category_id>/delete")
@admin_required
@limiter.limit("30 per minute")
def category_delete(category_id: int):
    form = DeleteCategoryForm()
    if not form.validate_on_submit():
        flash("Invalid delete request.", "error")
        return back_to("categories")
    try:
        outcome = categories_svc.delete_category(current_admin(), category_id)
    except ConsoleError as e:
        flash(e.message, "error")
    else:
        flash_outcome(outcome)
    return back_to("categories")
