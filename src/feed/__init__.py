"""Feed module.

Provides the feed controller with:
- Community-based visibility
- Author-only deletion behind a confirmation prompt
- Outcome notifications

Note: Router is not exported here to avoid circular imports.
Import directly from src.feed.router when needed.
"""

from .service import (
    ActionCancelledError,
    ActionOutcome,
    CommentNotFoundError,
    CommunityAccessError,
    Confirmation,
    EmptyContentError,
    FeedController,
    FeedError,
    PermissionDeniedError,
    PostNotFoundError,
    StaticConfirmation,
)
from .visibility import can_interact, can_view, visible_posts


__all__ = [
    "ActionCancelledError",
    "ActionOutcome",
    "CommentNotFoundError",
    "CommunityAccessError",
    "Confirmation",
    "EmptyContentError",
    "FeedController",
    "FeedError",
    "PermissionDeniedError",
    "PostNotFoundError",
    "StaticConfirmation",
    "can_interact",
    "can_view",
    "visible_posts",
]
