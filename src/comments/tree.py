"""Pure transforms over a comment forest.

A forest is the ordered tuple of root comments of a post. Every transform
returns a new forest and never mutates its input. A target id that is not
present anywhere in the forest yields a forest equal to the input; callers
that need to report a missing target look it up first with
:func:`find_comment`.

Nodes off the path to the target are returned as the same objects, so an
unchanged subtree is shared between the old and the new forest.
"""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import replace

from .models import Comment, toggle_liker


Forest = tuple[Comment, ...]
ForestTransform = Callable[[Forest], Forest]


def _with_replies(node: Comment, replies: Forest) -> Comment:
    """Rebuild ``node`` only if one of its replies actually changed."""
    if len(replies) == len(node.replies) and all(
        new is old for new, old in zip(replies, node.replies, strict=True)
    ):
        return node
    return replace(node, replies=replies)


def find_and_toggle_like(
    forest: Sequence[Comment], target_id: str, user_id: str
) -> Forest:
    """Flip ``user_id``'s like on the comment ``target_id``."""

    def visit(node: Comment) -> Comment:
        if node.id == target_id:
            return replace(node, liked_by=toggle_liker(node.liked_by, user_id))
        if node.replies:
            return _with_replies(node, tuple(visit(reply) for reply in node.replies))
        return node

    return tuple(visit(node) for node in forest)


def find_and_add_reply(
    forest: Sequence[Comment], target_parent_id: str, new_comment: Comment
) -> Forest:
    """Append ``new_comment`` to the replies of ``target_parent_id``.

    The target's own replies are not searched again once it has been found.
    """

    def visit(node: Comment) -> Comment:
        if node.id == target_parent_id:
            return replace(node, replies=(*node.replies, new_comment))
        if node.replies:
            return _with_replies(node, tuple(visit(reply) for reply in node.replies))
        return node

    return tuple(visit(node) for node in forest)


def find_and_delete(forest: Sequence[Comment], target_id: str) -> Forest:
    """Remove ``target_id`` and, with it, its whole subtree.

    Replies of the removed node are discarded, never promoted. No
    authorization happens here.
    """

    def prune(nodes: Sequence[Comment]) -> Forest:
        return tuple(
            _with_replies(node, prune(node.replies)) if node.replies else node
            for node in nodes
            if node.id != target_id
        )

    return prune(forest)


def iter_comments(forest: Sequence[Comment]) -> Iterator[Comment]:
    """Yield every comment depth-first, parents before their replies."""
    for node in forest:
        yield node
        yield from iter_comments(node.replies)


def find_comment(forest: Sequence[Comment], comment_id: str) -> Comment | None:
    """Return the comment with ``comment_id`` or None."""
    return next(
        (node for node in iter_comments(forest) if node.id == comment_id), None
    )


def count_comments(forest: Sequence[Comment]) -> int:
    """Total number of comments in the forest, replies included."""
    return sum(1 for _ in iter_comments(forest))
