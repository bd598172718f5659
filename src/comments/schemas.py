"""Pydantic schemas for comments.

Request/Response models with validation for:
- Top-level comments and replies
- Recursive comment thread responses
"""

from pydantic import BaseModel, Field, field_validator

from .models import Comment


MAX_COMMENT_LENGTH = 5000


class CreateCommentRequest(BaseModel):
    """Request to comment on a post or reply to a comment."""

    content: str = Field(..., min_length=1, max_length=MAX_COMMENT_LENGTH)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Strip whitespace and validate content."""
        v = v.strip()
        if not v:
            msg = "Content cannot be empty"
            raise ValueError(msg)
        return v


class AuthorResponse(BaseModel):
    """Author information in comment response."""

    id: str
    name: str


class CommentResponse(BaseModel):
    """A comment with its nested replies."""

    id: str
    author: AuthorResponse
    content: str
    created_at: str
    likes: int = 0
    liked_by_viewer: bool = False
    can_delete: bool = False
    replies: list["CommentResponse"] = Field(default_factory=list)

    @classmethod
    def from_comment(
        cls, comment: Comment, viewer_id: str | None = None
    ) -> "CommentResponse":
        """Create response (recursively) from a Comment node.

        Args:
            comment: Comment node
            viewer_id: Current viewer, used for like/delete flags
        """
        return cls(
            id=comment.id,
            author=AuthorResponse(id=comment.author_id, name=comment.author_name),
            content=comment.content,
            created_at=comment.created_at,
            likes=comment.likes,
            liked_by_viewer=viewer_id is not None and comment.is_liked_by(viewer_id),
            can_delete=viewer_id is not None and comment.author_id == viewer_id,
            replies=[cls.from_comment(reply, viewer_id) for reply in comment.replies],
        )
