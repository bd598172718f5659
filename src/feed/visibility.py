"""Feed visibility rules.

A viewer sees a post when it belongs to the general community or to a
community the viewer joined. The same predicate decides whether the viewer
may like or comment on the post.
"""

from collections.abc import Collection, Sequence

from src.auth.models import GENERAL_COMMUNITY_ID
from src.posts.models import Post


def can_view(
    post: Post,
    joined_communities: Collection[str],
    general_id: str = GENERAL_COMMUNITY_ID,
) -> bool:
    """Check whether a viewer with ``joined_communities`` can see ``post``."""
    return post.community_id == general_id or post.community_id in joined_communities


# Interaction (like, comment, reply) is allowed exactly where viewing is.
can_interact = can_view


def visible_posts(
    posts: Sequence[Post],
    joined_communities: Collection[str],
    general_id: str = GENERAL_COMMUNITY_ID,
) -> tuple[Post, ...]:
    """Posts visible to the viewer, in collection order."""
    joined = frozenset(joined_communities)
    return tuple(post for post in posts if can_view(post, joined, general_id))
