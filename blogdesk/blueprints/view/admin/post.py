from __future__ import annotations

from flask import flash, redirect, render_template, url_for
from pydantic import ValidationError

from blogdesk.decorators import admin_required
from blogdesk.errors import ConsoleError, NotFound
from blogdesk.extensions import limiter
from blogdesk.forms.posts import DeletePostForm, PostForm
from blogdesk.schemas.posts import PostCreate
from blogdesk.services import dashboard as dash
from blogdesk.services import posts as posts_svc
from blogdesk.services.categories import known_category_names
from blogdesk.utils.http_client import RemoteError

from blogdesk.blueprints.admin import back_to, bp, current_admin, flash_outcome


def _payload(form: PostForm) -> PostCreate:
    return PostCreate.model_validate({
        "title": form.title.data,
        "content": form.content.data,
        "category": form.category.data,
        "image_url": form.image_url.data,
    })


def _first_error(e: ValidationError) -> str:
    errors = e.errors()
    if not errors:
        return "Invalid post data"
    field = ".".join(str(part) for part in errors[0].get("loc", ())) or "post"
    return f"{field}: {errors[0].get('msg', 'invalid value')}"


def _held_post(post_id: int):
    try:
        post = dash.find_post(current_admin(), post_id)
    except RemoteError:
        flash(dash.FETCH_ERRORS[dash.POSTS], "error")
        return None
    if post is None:
        flash("Post not found", "error")
    return post


@bp.route("/posts/new", methods=["GET", "POST"])
@admin_required
@limiter.limit("30 per minute", methods=["POST"])
def post_new():
    """Create a post"""
    admin = current_admin()
    form = PostForm()
    form.set_category_choices(known_category_names(admin), placeholder=True)

    if form.validate_on_submit():
        try:
            outcome = posts_svc.create_post(admin, _payload(form))
        except ValidationError as e:
            flash(_first_error(e), "error")
        except ConsoleError as e:
            flash(e.message, "error")
        else:
            flash_outcome(outcome)
            # Redirecting drops the submitted values, leaving an empty form
            return back_to("posts")

    return render_template(
        "admin/post_form.html",
        form=form,
        title="Create New Post",
        action_url=url_for("admin.post_new"),
        submit_label="Create Post",
    )


@bp.route("/posts/<int:post_id>/edit", methods=["GET", "POST"])
@admin_required
@limiter.limit("30 per minute", methods=["POST"])
def post_edit(post_id: int):
    """Edit a post"""
    admin = current_admin()
    post = _held_post(post_id)
    if post is None:
        return back_to("posts")

    form = PostForm(obj=post)
    names = known_category_names(admin)
    if post.category and post.category not in names:
        names.append(post.category)
    form.set_category_choices(names, placeholder=False)

    if form.validate_on_submit():
        try:
            outcome = posts_svc.update_post(admin, post_id, _payload(form))
        except ValidationError as e:
            flash(_first_error(e), "error")
        except NotFound as e:
            flash(e.message, "error")
            return back_to("posts")
        except ConsoleError as e:
            flash(e.message, "error")
        else:
            flash_outcome(outcome)
            return back_to("posts")

    return render_template(
        "admin/post_form.html",
        form=form,
        post=post,
        title="Edit Post",
        action_url=url_for("admin.post_edit", post_id=post_id),
        submit_label="Update Post",
    )


@bp.route("/posts/<int:post_id>/delete", methods=["GET", "POST"])
@admin_required
@limiter.limit("30 per minute", methods=["POST"])
def post_delete(post_id: int):
    """Confirm, then permanently delete a post"""
    post = _held_post(post_id)
    if post is None:
        return back_to("posts")

    form = DeletePostForm()
    if form.validate_on_submit():
        try:
            outcome = posts_svc.delete_post(current_admin(), post_id)
        except ConsoleError as e:
            flash(e.message, "error")
        else:
            flash_outcome(outcome)
        return back_to("posts")

    return render_template(
        "admin/post_delete.html",
        form=form,
        post=post,
        pending=dash.is_pending(current_admin(), "delete_post", post_id),
    )
