from __future__ import annotations

# Re-export common forms for convenience
from .auth import LoginForm, LogoutForm  # noqa: F401
from .categories import CategoryForm, DeleteCategoryForm, RenameCategoryForm  # noqa: F401
from .comments import RefreshForm, ReplyForm  # noqa: F401
from .posts import DeletePostForm, PostForm  # noqa: F401

__all__ = [
    # auth
    "LoginForm",
    "LogoutForm",
    # categories
    "CategoryForm",
    "DeleteCategoryForm",
    "RenameCategoryForm",
    # comments / analytics
    "ReplyForm",
    "RefreshForm",
    # posts
    "PostForm",
    "DeletePostForm",
]
