from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, ValidationError

from blogdesk.decorators import api_admin_required
from blogdesk.errors import ConsoleError, NotFound, OperationFailed, OperationInProgress, ValidationFailed
from blogdesk.extensions import limiter
from blogdesk.schemas.posts import PostCreate
from blogdesk.services import analytics as analytics_svc
from blogdesk.services import categories as categories_svc
from blogdesk.services import comments as comments_svc
from blogdesk.services import dashboard as dash
from blogdesk.services import posts as posts_svc
from blogdesk.services.dashboard import LoadResult, Outcome

from blogdesk.blueprints.admin import current_admin

bp = Blueprint("admin_api", __name__)

_ERROR_STATUS = (
    (ValidationFailed, "bad_request", 400),
    (NotFound, "not_found", 404),
    (OperationInProgress, "conflict", 409),
    (OperationFailed, "remote_error", 502),
)


def _dump(value):
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


def _resource(result: LoadResult) -> dict:
    if result.ok:
        return {"status": "ok", "data": _dump(result.data)}
    return {"status": "error", "message": result.error}


def _error(e: ConsoleError):
    for exc_type, code, status in _ERROR_STATUS:
        if isinstance(e, exc_type):
            return jsonify({"error": code, "message": e.message}), status
    return jsonify({"error": "server_error", "message": e.message}), 500


def _outcome(outcome: Outcome, status: int = 200):
    return jsonify({
        "status": "ok",
        "message": outcome.message,
        "record": _dump(outcome.record),
        "refetch_errors": outcome.errors,
    }), status


def _body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@bp.get("/dashboard")
@api_admin_required
def dashboard_data():
    """All four resources read fresh, each with its own status."""
    results = dash.load_dashboard(current_admin(), refresh=True)
    return jsonify({name: _resource(result) for name, result in results.items()})


@bp.get("/posts")
@api_admin_required
def posts_list():
    result = dash.load_dashboard(current_admin(), (dash.POSTS,))[dash.POSTS]
    if not result.ok:
        return jsonify({"error": "remote_error", "message": result.error}), 502
    posts = posts_svc.filter_posts(result.data, request.args.get("q"))
    return jsonify({"status": "ok", "posts": _dump(posts), "total": len(result.data)})


@bp.post("/posts")
@api_admin_required
@limiter.limit("30 per minute")
def post_create():
    try:
        payload = PostCreate.model_validate(_body())
    except ValidationError:
        return jsonify({"error": "bad_request", "message": "title, content, category and image_url are required"}), 400
    try:
        return _outcome(posts_svc.create_post(current_admin(), payload), 201)
    except ConsoleError as e:
        return _error(e)


@bp.put("/posts/<int:post_id>")
@api_admin_required
@limiter.limit("30 per minute")
def post_update(post_id: int):
    try:
        payload = PostCreate.model_validate(_body())
    except ValidationError:
        return jsonify({"error": "bad_request", "message": "title, content, category and image_url are required"}), 400
    try:
        return _outcome(posts_svc.update_post(current_admin(), post_id, payload))
    except ConsoleError as e:
        return _error(e)


@bp.delete("/posts/<int:post_id>")
@api_admin_required
@limiter.limit("30 per minute")
def post_delete(post_id: int):
    try:
        return _outcome(posts_svc.delete_post(current_admin(), post_id))
    except ConsoleError as e:
        return _error(e)


@bp.get("/categories")
@api_admin_required
def categories_list():
    results = dash.load_dashboard(current_admin(), (dash.CATEGORIES, dash.POSTS))
    failed = [r.error for r in results.values() if not r.ok]
    if failed:
        return jsonify({"error": "remote_error", "message": failed[0]}), 502
    summaries = categories_svc.category_summaries(results[dash.CATEGORIES].data, results[dash.POSTS].data)
    return jsonify({"status": "ok", "categories": _dump(summaries)})


@bp.post("/categories")
@api_admin_required
@limiter.limit("30 per minute")
def category_add():
    try:
        return _outcome(categories_svc.add_category(current_admin(), _body().get("name")), 201)
    except ConsoleError as e:
        return _error(e)


@bp.patch("/categories/<int:category_id>")
@api_admin_required
@limiter.limit("30 per minute")
def category_rename(category_id: int):
    try:
        return _outcome(categories_svc.rename_category(current_admin(), category_id, _body().get("name")))
    except ConsoleError as e:
        return _error(e)


@bp.delete("/categories/<int:category_id>")
@api_admin_required
@limiter.limit("30 per minute")
def category_delete(category_id: int):
    try:
        return _outcome(categories_svc.delete_category(current_admin(), category_id))
    except ConsoleError as e:
        return _error(e)


@bp.post("/comments/<int:comment_id>/reply")
@api_admin_required
@limiter.limit("30 per minute")
def comment_reply(comment_id: int):
    try:
        return _outcome(comments_svc.reply_to_comment(current_admin(), comment_id, _body().get("admin_reply")))
    except ConsoleError as e:
        return _error(e)


@bp.get("/analytics")
@api_admin_required
def analytics():
    """Chart feed: at most ANALYTICS_DAYS points, oldest first."""
    admin = current_admin()
    if request.args.get("refresh") == "1":
        result = analytics_svc.refresh_analytics(admin)
    else:
        result = dash.load_dashboard(admin, (dash.ANALYTICS,))[dash.ANALYTICS]
    if not result.ok:
        return jsonify({"error": "remote_error", "message": result.error}), 502
    return jsonify({
        "status": "ok",
        "days": int(current_app.config.get("ANALYTICS_DAYS", 7)),
        "points": analytics_svc.chart_points(result.data),
    })
