from __future__ import annotations

from flask import flash, render_template, url_for

from blogdesk.decorators import admin_required
from blogdesk.errors import ConsoleError
from blogdesk.extensions import limiter
from blogdesk.forms.comments import ReplyForm
from blogdesk.services import comments as comments_svc
from blogdesk.services import dashboard as dash
from blogdesk.utils.http_client import RemoteError

from blogdesk.blueprints.admin import back_to, bp, current_admin, flash_outcome


@bp.route("/comments/<int:comment_id>/reply", methods=["GET", "POST"])
@admin_required
@limiter.limit("30 per minute", methods=["POST"])
def comment_reply(comment_id: int):
    """Reply panel for a single comment"""
    admin = current_admin()
    try:
        comments = dash.cached_list(admin, dash.COMMENTS)
    except RemoteError:
        flash(dash.FETCH_ERRORS[dash.COMMENTS], "error")
        return back_to("comments")
    comment = next((c for c in comments if c.id == comment_id), None)
    if comment is None:
        flash("Comment not found", "error")
        return back_to("comments")

    form = ReplyForm()
    if form.validate_on_submit():
        try:
            outcome = comments_svc.reply_to_comment(admin, comment_id, form.reply.data)
        except ConsoleError as e:
            flash(e.message, "error")
        else:
            flash_outcome(outcome)
            return back_to("comments")

    return render_template(
        "admin/comment_reply.html",
        form=form,
        comment=comment,
        action_url=url_for("admin.comment_reply", comment_id=comment_id),
        pending=dash.is_pending(admin, "reply_comment", comment_id),
    )
