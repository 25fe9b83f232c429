from __future__ import annotations

# Re-export common schema classes for convenient imports
from .categories import CategoryCreate  # noqa: F401
from .comments import CommentReply  # noqa: F401
from .posts import PostCreate, PostUpdate  # noqa: F401

__all__ = [
    "CategoryCreate",
    "CommentReply",
    "PostCreate",
    "PostUpdate",
]
