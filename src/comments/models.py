"""Comment tree model.

A comment owns its replies directly: every node carries an ordered tuple of
child comments, newest last. Nodes are frozen dataclasses so tree operations
always rebuild the path they touch instead of mutating shared state.

Serialized form mirrors the browser-storage shape (camelCase keys), with
``likedBy`` and ``replies`` optional on input.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4


def generate_id() -> str:
    """Generate an opaque unique identifier."""
    return uuid4().hex


def now_label() -> str:
    """Display-only creation timestamp."""
    return datetime.now(UTC).isoformat(timespec="seconds")


def normalize_likers(liked_by: Any) -> tuple[str, ...]:
    """Collapse a stored liker list into distinct ids, keeping first-seen order."""
    return tuple(dict.fromkeys(str(user_id) for user_id in liked_by or ()))


def toggle_liker(liked_by: tuple[str, ...], user_id: str) -> tuple[str, ...]:
    """Remove ``user_id`` if present, otherwise append it."""
    if user_id in liked_by:
        return tuple(liker for liker in liked_by if liker != user_id)
    return (*liked_by, user_id)


@dataclass(frozen=True)
class Comment:
    """Comment node with nested replies."""

    id: str
    author_id: str
    author_name: str
    content: str
    created_at: str
    liked_by: tuple[str, ...] = ()
    replies: tuple["Comment", ...] = ()

    @property
    def likes(self) -> int:
        """Like count, always equal to the number of distinct likers."""
        return len(self.liked_by)

    def is_liked_by(self, user_id: str) -> bool:
        """Check whether ``user_id`` currently likes this comment."""
        return user_id in self.liked_by

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Comment":
        """Create Comment (and its replies) from stored data."""
        return cls(
            id=str(data["id"]),
            author_id=str(data["authorId"]),
            author_name=data.get("authorName") or "Usuário",
            content=data.get("content", ""),
            created_at=data.get("createdAt", ""),
            liked_by=normalize_likers(data.get("likedBy")),
            replies=tuple(cls.from_dict(reply) for reply in data.get("replies") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (recursively)."""
        return {
            "id": self.id,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "content": self.content,
            "createdAt": self.created_at,
            "likes": self.likes,
            "likedBy": list(self.liked_by),
            "replies": [reply.to_dict() for reply in self.replies],
        }


def create_comment(
    author_id: str,
    author_name: str,
    content: str,
    comment_id: str | None = None,
    created_at: str | None = None,
) -> Comment:
    """Create a fresh comment with no likes and no replies."""
    return Comment(
        id=comment_id or generate_id(),
        author_id=author_id,
        author_name=author_name,
        content=content,
        created_at=created_at or now_label(),
    )
