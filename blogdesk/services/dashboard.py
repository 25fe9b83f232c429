"""Dashboard state: per-admin cached lists, the fan-out loader and
per-operation request tags.

Lists are never patched in place. After a write the affected resource is
fetched again in full and replaces the cached copy.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator

import structlog
from flask import current_app, g

from blogdesk.errors import OperationInProgress
from blogdesk.extensions import cache
from blogdesk.models.blog import Post
from blogdesk.models.session import AdminSession
from blogdesk.repositories import blog as repo
from blogdesk.utils.http_client import RemoteError

log = structlog.get_logger(__name__)

POSTS = "posts"
CATEGORIES = "categories"
COMMENTS = "comments"
ANALYTICS = "analytics"
RESOURCES = (POSTS, CATEGORIES, COMMENTS, ANALYTICS)

FETCH_ERRORS = {
    POSTS: "Failed to fetch posts",
    CATEGORIES: "Failed to fetch categories",
    COMMENTS: "Failed to fetch comments",
    ANALYTICS: "Failed to fetch analytics",
}


@dataclass
class LoadResult:
    resource: str
    ok: bool
    data: list = field(default_factory=list)
    error: str | None = None


@dataclass
class Outcome:
    """Result of a mutation: the success message plus the refetches it caused."""

    message: str
    record: Any = None
    refetched: list[LoadResult] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [r.error for r in self.refetched if not r.ok and r.error]


def _cache_key(user_id: str, resource: str) -> str:
    return f"dashboard:{user_id}:{resource}"


def _fetchers(app) -> dict[str, Callable[[str], list]]:
    days = int(app.config.get("ANALYTICS_DAYS", 7))
    return {
        POSTS: repo.list_posts,
        CATEGORIES: repo.list_categories,
        COMMENTS: repo.list_comments,
        ANALYTICS: lambda token: repo.list_recent_post_views(token, days),
    }


def _fetch(app, resource: str, admin: AdminSession, request_id: str | None = None) -> LoadResult:
    # Runs on loader threads, so it brings its own app context
    with app.app_context():
        if request_id:
            g.request_id = request_id
        key = _cache_key(admin.user_id, resource)
        try:
            data = _fetchers(app)[resource](admin.access_token)
        except RemoteError as e:
            log.warning("resource_fetch_failed", resource=resource, status=e.status_code, error=e.message)
            cache.delete(key)
            return LoadResult(resource, False, error=FETCH_ERRORS[resource])
        cache.set(key, data, timeout=app.config.get("DASHBOARD_CACHE_TIMEOUT"))
        return LoadResult(resource, True, data)


def load_dashboard(
    admin: AdminSession,
    resources: Iterable[str] = RESOURCES,
    *,
    refresh: bool = False,
) -> dict[str, LoadResult]:
    """Load the requested resources, fetching the uncached ones concurrently.

    Every resource reports its own result; one failure never hides the
    others. Results come back keyed by resource in the order requested.
    """
    resources = tuple(resources)
    app = current_app._get_current_object()
    results: dict[str, LoadResult] = {}
    missing: list[str] = []

    for resource in resources:
        if resource not in FETCH_ERRORS:
            raise ValueError(f"unknown dashboard resource: {resource}")
        if not refresh:
            cached = cache.get(_cache_key(admin.user_id, resource))
            if cached is not None:
                results[resource] = LoadResult(resource, True, cached)
                continue
        missing.append(resource)

    if missing:
        with ThreadPoolExecutor(max_workers=len(missing), thread_name_prefix="dashboard-load") as pool:
            request_id = g.get("request_id")
            futures = [pool.submit(_fetch, app, resource, admin, request_id) for resource in missing]
            for future in as_completed(futures):
                result = future.result()
                results[result.resource] = result
        log.info(
            "dashboard_loaded",
            fetched=missing,
            failed=[r for r in missing if not results[r].ok],
        )

    return {resource: results[resource] for resource in resources}


def refetch(admin: AdminSession, resource: str) -> LoadResult:
    """Replace one cached list with a fresh full read."""
    if resource not in FETCH_ERRORS:
        raise ValueError(f"unknown dashboard resource: {resource}")
    return _fetch(current_app._get_current_object(), resource, admin, g.get("request_id"))


def invalidate(user_id: str, resources: Iterable[str] = RESOURCES) -> None:
    cache.delete_many(*[_cache_key(user_id, r) for r in resources])


def cached_list(admin: AdminSession, resource: str) -> list:
    """The cached list for ``resource``, loading it first if needed.

    Raises:
        RemoteError: If the list is not cached and cannot be fetched.
    """
    result = load_dashboard(admin, (resource,))[resource]
    if not result.ok:
        raise RemoteError(result.error or FETCH_ERRORS[resource])
    return result.data


def find_post(admin: AdminSession, post_id: int) -> Post | None:
    return next((p for p in cached_list(admin, POSTS) if p.id == post_id), None)


# Per-operation request state
def _operation_key(user_id: str, kind: str, target: Any = None) -> str:
    return f"op:{user_id}:{kind}:{'-' if target is None else target}"


@contextmanager
def operation(admin: AdminSession, kind: str, target: Any = None) -> Iterator[None]:
    """Tag an in-flight operation by kind and target.

    An identical operation already in flight is refused; unrelated
    operations never wait on each other. The tag is always removed on exit.
    """
    key = _operation_key(admin.user_id, kind, target)
    timeout = int(current_app.config.get("OPERATION_LOCK_SECONDS", 30))
    if not cache.add(key, True, timeout=timeout):
        log.info("operation_in_progress", kind=kind, target=target)
        raise OperationInProgress()
    try:
        yield
    finally:
        cache.delete(key)


def is_pending(admin: AdminSession, kind: str, target: Any = None) -> bool:
    return bool(cache.has(_operation_key(admin.user_id, kind, target)))
