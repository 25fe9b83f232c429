from __future__ import annotations

import structlog

from blogdesk.errors import NotFound, OperationFailed
from blogdesk.models.blog import Post
from blogdesk.models.session import AdminSession
from blogdesk.repositories import blog as repo
from blogdesk.schemas.posts import PostCreate, PostUpdate
from blogdesk.services import dashboard
from blogdesk.services.dashboard import Outcome
from blogdesk.utils.http_client import RemoteError

log = structlog.get_logger(__name__)


def filter_posts(posts: list[Post], term: str | None) -> list[Post]:
    """Case-insensitive substring match on title or category."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(posts)
    return [p for p in posts if needle in p.title.lower() or needle in p.category.lower()]


def create_post(admin: AdminSession, payload: PostCreate) -> Outcome:
    with dashboard.operation(admin, "create_post"):
        try:
            post = repo.create_post(token=admin.access_token, **payload.to_row())
        except RemoteError as e:
            log.error("post_create_failed", error=e.message, status=e.status_code)
            raise OperationFailed("Failed to create post") from e
        log.info("post_created", post_id=getattr(post, "id", None))
        refetched = [dashboard.refetch(admin, dashboard.POSTS)]
    return Outcome("Post created successfully", post, refetched)


def update_post(admin: AdminSession, post_id: int, payload: PostCreate) -> Outcome:
    """Submit the full edited record; the view counter is echoed as held."""
    with dashboard.operation(admin, "update_post", post_id):
        try:
            held = dashboard.find_post(admin, post_id)
        except RemoteError as e:
            raise OperationFailed("Failed to update post") from e
        if held is None:
            raise NotFound("Post not found")

        update = PostUpdate(**payload.model_dump(), views=held.views)
        try:
            updated = repo.update_post(post_id, token=admin.access_token, **update.model_dump())
        except RemoteError as e:
            log.error("post_update_failed", post_id=post_id, error=e.message, status=e.status_code)
            raise OperationFailed("Failed to update post") from e
        log.info("post_updated", post_id=post_id)
        refetched = [dashboard.refetch(admin, dashboard.POSTS)]
    return Outcome("Post updated successfully", updated[0] if updated else None, refetched)


def delete_post(admin: AdminSession, post_id: int) -> Outcome:
    with dashboard.operation(admin, "delete_post", post_id):
        try:
            repo.delete_post(post_id, token=admin.access_token)
        except RemoteError as e:
            log.error("post_delete_failed", post_id=post_id, error=e.message, status=e.status_code)
            raise OperationFailed("Failed to delete post") from e
        log.info("post_deleted", post_id=post_id)
        refetched = [dashboard.refetch(admin, dashboard.POSTS)]
    return Outcome("Post deleted successfully", None, refetched)
