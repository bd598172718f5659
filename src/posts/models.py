"""Post model.

A post belongs to one community and embeds the forest of root comments
written on it. Like state follows the same rules as comments: ``likes`` is
derived from the distinct ``liked_by`` ids.
"""

from dataclasses import dataclass
from typing import Any

from src.comments.models import Comment, generate_id, normalize_likers, now_label


@dataclass(frozen=True)
class Post:
    """Feed post with its comment forest."""

    id: str
    community_id: str
    author_id: str
    author_name: str
    content: str
    created_at: str
    liked_by: tuple[str, ...] = ()
    comments: tuple[Comment, ...] = ()

    @property
    def likes(self) -> int:
        """Like count, always equal to the number of distinct likers."""
        return len(self.liked_by)

    def is_liked_by(self, user_id: str) -> bool:
        """Check whether ``user_id`` currently likes this post."""
        return user_id in self.liked_by

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Post":
        """Create Post from stored data."""
        return cls(
            id=str(data["id"]),
            community_id=str(data["communityId"]),
            author_id=str(data["authorId"]),
            author_name=data.get("authorName") or "Usuário",
            content=data.get("content", ""),
            created_at=data.get("createdAt", ""),
            liked_by=normalize_likers(data.get("likedBy")),
            comments=tuple(
                Comment.from_dict(comment) for comment in data.get("comments") or ()
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "communityId": self.community_id,
            "authorId": self.author_id,
            "authorName": self.author_name,
            "content": self.content,
            "createdAt": self.created_at,
            "likes": self.likes,
            "likedBy": list(self.liked_by),
            "comments": [comment.to_dict() for comment in self.comments],
        }


def make_post(
    community_id: str,
    author_id: str,
    author_name: str,
    content: str,
    post_id: str | None = None,
    created_at: str | None = None,
) -> Post:
    """Create a fresh post with no likes and no comments."""
    return Post(
        id=post_id or generate_id(),
        community_id=community_id,
        author_id=author_id,
        author_name=author_name,
        content=content,
        created_at=created_at or now_label(),
    )
