"""Post module.

Provides the post model and the store owning the ordered post collection.
"""

from .models import Post, make_post
from .store import (
    PostCollection,
    PostStore,
    add_comment,
    add_reply,
    apply_to_post,
    create_post,
    delete_comment,
    delete_post,
    get_post,
    like_comment,
    toggle_post_like,
)


__all__ = [
    "Post",
    "PostCollection",
    "PostStore",
    "add_comment",
    "add_reply",
    "apply_to_post",
    "create_post",
    "delete_comment",
    "delete_post",
    "get_post",
    "like_comment",
    "make_post",
    "toggle_post_like",
]
