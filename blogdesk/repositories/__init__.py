from blogdesk.repositories.blog import (
    list_posts,
    category_has_posts,
    create_post,
    update_post,
    delete_post,
    reassign_posts_category,
    list_categories,
    create_category,
    rename_category,
    delete_category,
    list_comments,
    set_comment_reply,
    list_recent_post_views,
)

__all__ = [
    # Posts
    "list_posts",
    "category_has_posts",
    "create_post",
    "update_post",
    "delete_post",
    "reassign_posts_category",
    # Categories
    "list_categories",
    "create_category",
    "rename_category",
    "delete_category",
    # Comments
    "list_comments",
    "set_comment_reply",
    # Analytics
    "list_recent_post_views",
]
