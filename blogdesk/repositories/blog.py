from __future__ import annotations

from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from blogdesk.models.blog import Category, Comment, Post, PostView
from blogdesk.utils.http_client import RemoteError, current_store

M = TypeVar("M", bound=BaseModel)


def _parse(model: type[M], rows: list[dict], resource: str) -> list[M]:
    try:
        return [model.model_validate(row) for row in rows]
    except ValidationError as e:
        raise RemoteError(f"malformed {resource} row: {e.error_count()} error(s)") from e


# Post repositories
def list_posts(token: str) -> list[Post]:
    rows = current_store().select("posts", order="created_at", ascending=False, token=token)
    posts = _parse(Post, rows, "posts")
    return sorted(posts, key=lambda p: p.created_at, reverse=True)


def category_has_posts(name: str, *, token: str) -> bool:
    rows = current_store().select("posts", columns="id", filters={"category": name}, limit=1, token=token)
    return bool(rows)


def create_post(*, token: str, title: str, content: str, category: str, image_url: str) -> Optional[Post]:
    rows = current_store().insert(
        "posts",
        [{
            "title": title,
            "content": content,
            "category": category,
            "image_url": image_url,
            "views": 0,
        }],
        token=token,
    )
    created = _parse(Post, rows, "posts")
    return created[0] if created else None


def update_post(
    post_id: int,
    *,
    token: str,
    title: str,
    content: str,
    category: str,
    image_url: str,
    views: int,
) -> list[Post]:
    rows = current_store().update(
        "posts",
        {
            "title": title,
            "content": content,
            "category": category,
            "image_url": image_url,
            "views": views,
        },
        match={"id": post_id},
        token=token,
    )
    return _parse(Post, rows, "posts")


def delete_post(post_id: int, *, token: str) -> None:
    current_store().delete("posts", match={"id": post_id}, token=token)


def reassign_posts_category(old_name: str, new_name: str, *, token: str) -> int:
    rows = current_store().update(
        "posts", {"category": new_name}, match={"category": old_name}, token=token
    )
    return len(rows)


# Category repositories
def list_categories(token: str) -> list[Category]:
    rows = current_store().select("categories", order="name", token=token)
    return _parse(Category, rows, "categories")


def create_category(name: str, *, token: str) -> Optional[Category]:
    rows = current_store().insert("categories", [{"name": name}], token=token)
    created = _parse(Category, rows, "categories")
    return created[0] if created else None


def rename_category(category_id: int, name: str, *, token: str) -> list[Category]:
    rows = current_store().update("categories", {"name": name}, match={"id": category_id}, token=token)
    return _parse(Category, rows, "categories")


def delete_category(category_id: int, *, token: str) -> None:
    current_store().delete("categories", match={"id": category_id}, token=token)


# Comment repositories
def list_comments(token: str) -> list[Comment]:
    rows = current_store().select("comments", order="created_at", ascending=False, token=token)
    comments = _parse(Comment, rows, "comments")
    return sorted(comments, key=lambda c: c.created_at, reverse=True)


def set_comment_reply(comment_id: int, reply: str, *, token: str) -> list[Comment]:
    rows = current_store().update(
        "comments", {"admin_reply": reply}, match={"id": comment_id}, token=token
    )
    return _parse(Comment, rows, "comments")


# Analytics repositories
def list_recent_post_views(token: str, days: int = 7) -> list[PostView]:
    """The latest ``days`` daily rows, oldest first."""
    rows = current_store().select("post_views", order="date", ascending=False, limit=days, token=token)
    views = sorted(_parse(PostView, rows, "post_views"), key=lambda v: v.date)
    return views[-days:] if days > 0 else []
