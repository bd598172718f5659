"""Comment tree module.

Provides the recursive comment model with:
- Nested replies of arbitrary depth
- Per-node like toggling
- Cascade deletion of a node and its subtree
"""

from .models import Comment, create_comment
from .tree import (
    Forest,
    ForestTransform,
    count_comments,
    find_and_add_reply,
    find_and_delete,
    find_and_toggle_like,
    find_comment,
    iter_comments,
)


__all__ = [
    "Comment",
    "Forest",
    "ForestTransform",
    "count_comments",
    "create_comment",
    "find_and_add_reply",
    "find_and_delete",
    "find_and_toggle_like",
    "find_comment",
    "iter_comments",
]
