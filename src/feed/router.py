"""Feed API endpoints.

Provides routes for:
- The viewer's feed
- Publishing and deleting posts
- Liking posts and comments
- Comments and nested replies
"""

from fastapi import APIRouter, Request, status

from src.auth.dependencies import CurrentViewer
from src.comments.schemas import CreateCommentRequest
from src.posts.models import Post
from src.posts.schemas import CreatePostRequest, FeedResponse, PostResponse

from .dependencies import (
    ConfirmationDep,
    FeedControllerDep,
    raise_for_outcome,
)
from .schemas import MessageResponse


router = APIRouter(prefix="/v1", tags=["feed"])


def _community_name(request: Request, community_id: str) -> str | None:
    service = getattr(request.app.state, "community_service", None)
    return service.label(community_id) if service else None


def _to_response(request: Request, post: Post, viewer_id: str) -> PostResponse:
    return PostResponse.from_post(
        post, viewer_id, _community_name(request, post.community_id)
    )


@router.get("/feed", response_model=FeedResponse, summary="Viewer feed")
def get_feed(
    request: Request,
    controller: FeedControllerDep,
    viewer: CurrentViewer,
) -> FeedResponse:
    """Posts from the general community and the viewer's communities."""
    posts = controller.feed(viewer)
    items = [_to_response(request, post, viewer.id) for post in posts]
    return FeedResponse(items=items, total=len(items))


@router.post(
    "/posts",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Publish post",
)
def create_post(
    data: CreatePostRequest,
    request: Request,
    controller: FeedControllerDep,
    viewer: CurrentViewer,
) -> PostResponse:
    """Publish a post in the general community or a joined community."""
    outcome = controller.create_post(viewer, data.community_id, data.content)
    raise_for_outcome(outcome)
    return _to_response(request, outcome.post, viewer.id)


@router.delete(
    "/posts/{post_id}",
    response_model=MessageResponse,
    summary="Delete post",
)
def delete_post(
    post_id: str,
    controller: FeedControllerDep,
    viewer: CurrentViewer,
    confirmation: ConfirmationDep,
) -> MessageResponse:
    """Delete one of the viewer's posts. Requires ``?confirm=true``."""
    outcome = controller.delete_post(viewer, post_id, confirmation)
    raise_for_outcome(outcome)
    return MessageResponse(message="Postagem removida.")


@router.post(
    "/posts/{post_id}/like",
    response_model=PostResponse,
    summary="Like or unlike post",
)
def like_post(
    post_id: str,
    request: Request,
    controller: FeedControllerDep,
    viewer: CurrentViewer,
) -> PostResponse:
    """Toggle the viewer's like on a post."""
    outcome = controller.like_post(viewer, post_id)
    raise_for_outcome(outcome)
    return _to_response(request, outcome.post, viewer.id)


@router.post(
    "/posts/{post_id}/comments",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on post",
)
def add_comment(
    post_id: str,
    data: CreateCommentRequest,
    request: Request,
    controller: FeedControllerDep,
    viewer: CurrentViewer,
) -> PostResponse:
    """Add a top-level comment to a post."""
    outcome = controller.add_comment(viewer, post_id, data.content)
    raise_for_outcome(outcome)
    return _to_response(request, outcome.post, viewer.id)


@router.post(
    "/posts/{post_id}/comments/{comment_id}/replies",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Reply to comment",
)
def add_reply(
    post_id: str,
    comment_id: str,
    data: CreateCommentRequest,
    request: Request,
    controller: FeedControllerDep,
    viewer: CurrentViewer,
) -> PostResponse:
    """Reply to a comment at any depth."""
    outcome = controller.add_reply(viewer, post_id, comment_id, data.content)
    raise_for_outcome(outcome)
    return _to_response(request, outcome.post, viewer.id)


@router.post(
    "/posts/{post_id}/comments/{comment_id}/like",
    response_model=PostResponse,
    summary="Like or unlike comment",
)
def like_comment(
    post_id: str,
    comment_id: str,
    request: Request,
    controller: FeedControllerDep,
    viewer: CurrentViewer,
) -> PostResponse:
    """Toggle the viewer's like on a comment."""
    outcome = controller.like_comment(viewer, post_id, comment_id)
    raise_for_outcome(outcome)
    return _to_response(request, outcome.post, viewer.id)


@router.delete(
    "/posts/{post_id}/comments/{comment_id}",
    response_model=PostResponse,
    summary="Delete comment",
)
def delete_comment(
    post_id: str,
    comment_id: str,
    request: Request,
    controller: FeedControllerDep,
    viewer: CurrentViewer,
    confirmation: ConfirmationDep,
) -> PostResponse:
    """Delete one of the viewer's comments with every reply under it.

    Requires ``?confirm=true``.
    """
    outcome = controller.delete_comment(viewer, post_id, comment_id, confirmation)
    raise_for_outcome(outcome)
    return _to_response(request, outcome.post, viewer.id)
