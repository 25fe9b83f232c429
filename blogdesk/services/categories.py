"""Category operations.

Categories are stored rows. The distinct ``category`` values across posts
are kept only as a read-time view, used for post counts and to surface
names that posts reference but no row records.
"""

from __future__ import annotations

import structlog
from pydantic import ValidationError

from blogdesk.errors import NotFound, OperationFailed, ValidationFailed
from blogdesk.models.blog import Category, CategorySummary, Post
from blogdesk.models.session import AdminSession
from blogdesk.repositories import blog as repo
from blogdesk.schemas.categories import CategoryCreate
from blogdesk.services import dashboard
from blogdesk.services.dashboard import Outcome
from blogdesk.utils.http_client import RemoteError

log = structlog.get_logger(__name__)


def derive_categories(posts: list[Post]) -> dict[str, int]:
    """Distinct post categories (first appearance order) with post counts."""
    counts: dict[str, int] = {}
    for post in posts:
        counts[post.category] = counts.get(post.category, 0) + 1
    return counts


def category_summaries(categories: list[Category], posts: list[Post]) -> list[CategorySummary]:
    derived = derive_categories(posts)
    summaries = [
        CategorySummary(id=c.id, name=c.name, post_count=derived.get(c.name, 0))
        for c in categories
    ]
    stored = {c.name for c in categories}
    summaries.extend(
        CategorySummary(name=name, post_count=count)
        for name, count in derived.items()
        if name and name not in stored
    )
    return summaries


def known_category_names(admin: AdminSession) -> list[str]:
    """Names currently shown: whatever of categories and posts is loaded."""
    results = dashboard.load_dashboard(admin, (dashboard.CATEGORIES, dashboard.POSTS))
    categories = results[dashboard.CATEGORIES].data if results[dashboard.CATEGORIES].ok else []
    posts = results[dashboard.POSTS].data if results[dashboard.POSTS].ok else []
    return [s.name for s in category_summaries(categories, posts)]


def _clean_name(raw_name: str | None) -> str:
    name = (raw_name or "").strip()
    if not name:
        raise ValidationFailed("Please enter a category name")
    try:
        return CategoryCreate(name=name).name
    except ValidationError as e:
        raise ValidationFailed("Category name must be at most 80 characters") from e


def _find_stored(admin: AdminSession, category_id: int, failure: str) -> Category:
    try:
        categories = dashboard.cached_list(admin, dashboard.CATEGORIES)
    except RemoteError as e:
        raise OperationFailed(failure) from e
    found = next((c for c in categories if c.id == category_id), None)
    if found is None:
        raise NotFound("Category not found")
    return found


def add_category(admin: AdminSession, raw_name: str | None) -> Outcome:
    name = _clean_name(raw_name)
    # Exact, case-sensitive match
    if name in known_category_names(admin):
        raise ValidationFailed("Category already exists")

    with dashboard.operation(admin, "add_category", name):
        try:
            created = repo.create_category(name, token=admin.access_token)
        except RemoteError as e:
            log.error("category_create_failed", name=name, error=e.message, status=e.status_code)
            raise OperationFailed("Failed to add category") from e
        log.info("category_created", name=name)
        refetched = [dashboard.refetch(admin, dashboard.CATEGORIES)]
    return Outcome("Category added successfully", created, refetched)


def rename_category(admin: AdminSession, category_id: int, raw_name: str | None) -> Outcome:
    name = _clean_name(raw_name)
    current = _find_stored(admin, category_id, "Failed to rename category")
    if name == current.name:
        return Outcome("Category renamed successfully", current)
    if name in known_category_names(admin):
        raise ValidationFailed("Category already exists")

    with dashboard.operation(admin, "rename_category", category_id):
        try:
            repo.rename_category(category_id, name, token=admin.access_token)
            moved = repo.reassign_posts_category(current.name, name, token=admin.access_token)
        except RemoteError as e:
            log.error("category_rename_failed", category_id=category_id, error=e.message, status=e.status_code)
            # The row may already carry the new name; show what the store now holds
            dashboard.refetch(admin, dashboard.CATEGORIES)
            dashboard.refetch(admin, dashboard.POSTS)
            raise OperationFailed("Failed to rename category") from e
        log.info("category_renamed", category_id=category_id, old=current.name, new=name, posts_moved=moved)
        refetched = [
            dashboard.refetch(admin, dashboard.CATEGORIES),
            dashboard.refetch(admin, dashboard.POSTS),
        ]
    return Outcome("Category renamed successfully", None, refetched)


def delete_category(admin: AdminSession, category_id: int) -> Outcome:
    current = _find_stored(admin, category_id, "Failed to delete category")

    with dashboard.operation(admin, "delete_category", category_id):
        try:
            if repo.category_has_posts(current.name, token=admin.access_token):
                raise ValidationFailed("Category still has posts")
            repo.delete_category(category_id, token=admin.access_token)
        except RemoteError as e:
            log.error("category_delete_failed", category_id=category_id, error=e.message, status=e.status_code)
            raise OperationFailed("Failed to delete category") from e
        log.info("category_deleted", category_id=category_id, name=current.name)
        refetched = [dashboard.refetch(admin, dashboard.CATEGORIES)]
    return Outcome("Category deleted successfully", None, refetched)
