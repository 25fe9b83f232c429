from __future__ import annotations

from blogdesk.models.blog import Category, CategorySummary, Comment, Post, PostView
from blogdesk.models.session import AdminSession

__all__ = [
    "AdminSession",
    "Category",
    "CategorySummary",
    "Comment",
    "Post",
    "PostView",
]
