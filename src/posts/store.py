"""Post collection operations and the store that owns the collection.

The module-level functions are pure: each takes the ordered post collection
(newest first) and returns a new one, leaving untouched posts as the same
objects. Unknown ids and unauthorized deletions leave the collection as is.

``PostStore`` is the single owner of the in-memory collection. It runs those
functions, persists the whole collection through a repository whenever it
changed and reports whether anything changed.
"""

import threading
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import TYPE_CHECKING

import structlog

from src.comments.models import Comment, toggle_liker
from src.comments.tree import (
    Forest,
    ForestTransform,
    find_and_add_reply,
    find_and_delete,
    find_and_toggle_like,
    find_comment,
)

from .models import Post


if TYPE_CHECKING:
    from src.storage.repository import PostRepository


logger = structlog.get_logger(__name__)

PostCollection = tuple[Post, ...]


# ==============================================================================
# Pure collection operations
# ==============================================================================


def get_post(collection: Sequence[Post], post_id: str) -> Post | None:
    """Return the post with ``post_id`` or None."""
    return next((post for post in collection if post.id == post_id), None)


def create_post(collection: Sequence[Post], new_post: Post) -> PostCollection:
    """Prepend ``new_post`` (newest-first feed)."""
    return (new_post, *collection)


def delete_post(
    collection: Sequence[Post], post_id: str, requester_id: str
) -> PostCollection:
    """Remove the post if ``requester_id`` wrote it; otherwise a no-op."""
    post = get_post(collection, post_id)
    if post is None or post.author_id != requester_id:
        return tuple(collection)
    return tuple(p for p in collection if p.id != post_id)


def toggle_post_like(
    collection: Sequence[Post], post_id: str, user_id: str
) -> PostCollection:
    """Flip ``user_id``'s like on the post."""
    return tuple(
        replace(post, liked_by=toggle_liker(post.liked_by, user_id))
        if post.id == post_id
        else post
        for post in collection
    )


def apply_to_post(
    collection: Sequence[Post], post_id: str, fn: ForestTransform
) -> PostCollection:
    """Run a forest transform on one post's comments.

    Every other post is returned unchanged.
    """

    def visit(post: Post) -> Post:
        if post.id != post_id:
            return post
        comments = fn(post.comments)
        if comments is post.comments:
            return post
        return replace(post, comments=comments)

    return tuple(visit(post) for post in collection)


def add_comment(
    collection: Sequence[Post], post_id: str, comment: Comment
) -> PostCollection:
    """Append a root comment to the post."""
    return apply_to_post(collection, post_id, lambda forest: (*forest, comment))


def add_reply(
    collection: Sequence[Post], post_id: str, parent_id: str, reply: Comment
) -> PostCollection:
    """Append ``reply`` under the comment ``parent_id``."""
    return apply_to_post(
        collection,
        post_id,
        lambda forest: find_and_add_reply(forest, parent_id, reply),
    )


def like_comment(
    collection: Sequence[Post], post_id: str, comment_id: str, user_id: str
) -> PostCollection:
    """Flip ``user_id``'s like on a comment of the post."""
    return apply_to_post(
        collection,
        post_id,
        lambda forest: find_and_toggle_like(forest, comment_id, user_id),
    )


def delete_comment(
    collection: Sequence[Post], post_id: str, comment_id: str, requester_id: str
) -> PostCollection:
    """Delete a comment (and its replies) if ``requester_id`` wrote it."""

    def transform(forest: Forest) -> Forest:
        target = find_comment(forest, comment_id)
        if target is None or target.author_id != requester_id:
            return forest
        return find_and_delete(forest, comment_id)

    return apply_to_post(collection, post_id, transform)


# ==============================================================================
# Post Store
# ==============================================================================


class PostStore:
    """Owner of the post collection for one session.

    Every mutation runs read, transform, save and assign under one lock, so
    concurrent requests apply their changes one after the other.
    """

    def __init__(
        self,
        repository: "PostRepository",
        seed: Sequence[Post] | None = None,
    ) -> None:
        """Initialize with a repository and optional seed posts for empty storage."""
        self.repository = repository
        self.seed = tuple(seed or ())
        self._posts: PostCollection | None = None
        self._lock = threading.RLock()

    def load(self) -> PostCollection:
        """Load the collection from the repository, seeding it when empty."""
        with self._lock:
            posts = tuple(self.repository.load())
            if not posts and self.seed:
                posts = self.seed
                self.repository.save(posts)
                logger.info("post_store_seeded", post_count=len(posts))
            self._posts = posts
        logger.debug("post_store_loaded", post_count=len(posts))
        return posts

    @property
    def posts(self) -> PostCollection:
        """Current collection, loaded on first access."""
        with self._lock:
            if self._posts is None:
                return self.load()
            return self._posts

    def get_post(self, post_id: str) -> Post | None:
        """Return the post with ``post_id`` or None."""
        return get_post(self.posts, post_id)

    def _commit(
        self,
        operation: str,
        transform: Callable[[PostCollection], PostCollection],
        **fields: str,
    ) -> bool:
        """Apply ``transform`` to the current collection and persist the result.

        Nothing is saved when the result equals the current collection. The
        in-memory collection only changes after the repository accepted the
        write.
        """
        with self._lock:
            current = self.posts
            updated = transform(current)
            if updated == current:
                logger.debug("post_store_noop", operation=operation, **fields)
                return False
            self.repository.save(updated)
            self._posts = updated
        logger.info(
            "post_store_saved",
            operation=operation,
            post_count=len(updated),
            **fields,
        )
        return True

    def create_post(self, new_post: Post) -> bool:
        """Prepend a new post."""
        return self._commit(
            "create_post",
            lambda posts: create_post(posts, new_post),
            post_id=new_post.id,
        )

    def delete_post(self, post_id: str, requester_id: str) -> bool:
        """Delete a post written by ``requester_id``."""
        return self._commit(
            "delete_post",
            lambda posts: delete_post(posts, post_id, requester_id),
            post_id=post_id,
        )

    def toggle_post_like(self, post_id: str, user_id: str) -> bool:
        """Like or unlike a post."""
        return self._commit(
            "toggle_post_like",
            lambda posts: toggle_post_like(posts, post_id, user_id),
            post_id=post_id,
        )

    def add_comment(self, post_id: str, comment: Comment) -> bool:
        """Add a root comment to a post."""
        return self._commit(
            "add_comment",
            lambda posts: add_comment(posts, post_id, comment),
            post_id=post_id,
            comment_id=comment.id,
        )

    def add_reply(self, post_id: str, parent_id: str, reply: Comment) -> bool:
        """Reply to a comment of a post."""
        return self._commit(
            "add_reply",
            lambda posts: add_reply(posts, post_id, parent_id, reply),
            post_id=post_id,
            parent_id=parent_id,
            comment_id=reply.id,
        )

    def like_comment(self, post_id: str, comment_id: str, user_id: str) -> bool:
        """Like or unlike a comment of a post."""
        return self._commit(
            "like_comment",
            lambda posts: like_comment(posts, post_id, comment_id, user_id),
            post_id=post_id,
            comment_id=comment_id,
        )

    def delete_comment(self, post_id: str, comment_id: str, requester_id: str) -> bool:
        """Delete a comment written by ``requester_id`` together with its replies."""
        return self._commit(
            "delete_comment",
            lambda posts: delete_comment(posts, post_id, comment_id, requester_id),
            post_id=post_id,
            comment_id=comment_id,
        )
