"""Pydantic schemas for posts."""

from pydantic import BaseModel, Field, field_validator

from src.comments.schemas import AuthorResponse, CommentResponse
from src.comments.tree import count_comments

from .models import Post


MAX_POST_LENGTH = 10000


class CreatePostRequest(BaseModel):
    """Request to publish a post in a community."""

    community_id: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=MAX_POST_LENGTH)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Strip whitespace and validate content."""
        v = v.strip()
        if not v:
            msg = "Content cannot be empty"
            raise ValueError(msg)
        return v


class PostResponse(BaseModel):
    """A post with its full comment thread."""

    id: str
    community_id: str
    community_name: str
    author: AuthorResponse
    content: str
    created_at: str
    likes: int = 0
    liked_by_viewer: bool = False
    can_delete: bool = False
    comment_count: int = 0
    comments: list[CommentResponse] = Field(default_factory=list)

    @classmethod
    def from_post(
        cls,
        post: Post,
        viewer_id: str | None = None,
        community_name: str | None = None,
    ) -> "PostResponse":
        """Create response from a Post.

        Args:
            post: Post entity
            viewer_id: Current viewer, used for like/delete flags
            community_name: Display name of the post's community
        """
        return cls(
            id=post.id,
            community_id=post.community_id,
            community_name=community_name or post.community_id,
            author=AuthorResponse(id=post.author_id, name=post.author_name),
            content=post.content,
            created_at=post.created_at,
            likes=post.likes,
            liked_by_viewer=viewer_id is not None and post.is_liked_by(viewer_id),
            can_delete=viewer_id is not None and post.author_id == viewer_id,
            comment_count=count_comments(post.comments),
            comments=[
                CommentResponse.from_comment(comment, viewer_id)
                for comment in post.comments
            ],
        )


class FeedResponse(BaseModel):
    """Posts visible to the viewer, newest first."""

    items: list[PostResponse]
    total: int
