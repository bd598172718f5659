"""Feed controller.

Turns viewer intents (publish, like, comment, reply, delete) into post store
operations. Every intent is checked before the store is touched:
- blank text is discarded
- the post must be visible to the viewer to like or comment on it
- only the author may delete a post or comment
- deletions go through a confirmation prompt

Failures never propagate to the caller. Each operation returns an
``ActionOutcome`` and reports what happened through the notification port.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import structlog

from src.auth.models import GENERAL_COMMUNITY_ID, Viewer
from src.comments.models import Comment, create_comment
from src.comments.tree import find_comment
from src.core.context import RequestContext, get_request_id
from src.notifications.models import NotificationKind
from src.notifications.service import Notifier
from src.posts.models import Post, make_post
from src.posts.store import PostStore
from src.storage.repository import StorageError

from .visibility import can_interact, visible_posts


logger = structlog.get_logger(__name__)


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class FeedError(Exception):
    """Base feed error."""

    # Whether the viewer is told about this failure
    notify = True

    def __init__(self, message: str, code: str = "feed_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class PostNotFoundError(FeedError):
    """Post not found."""

    def __init__(self, message: str = "Postagem nao encontrada"):
        super().__init__(message, "post_not_found")


class CommentNotFoundError(FeedError):
    """Comment not found."""

    def __init__(self, message: str = "Comentario nao encontrado"):
        super().__init__(message, "comment_not_found")


class PermissionDeniedError(FeedError):
    """Only the author may perform this operation."""

    def __init__(self, message: str = "Permissao negada"):
        super().__init__(message, "permission_denied")


class CommunityAccessError(FeedError):
    """Viewer is not a member of the post's community."""

    def __init__(self, message: str = "Participe do grupo para interagir"):
        super().__init__(message, "community_access_denied")


class EmptyContentError(FeedError):
    """Blank submission."""

    notify = False

    def __init__(self, message: str = "O texto nao pode ser vazio"):
        super().__init__(message, "empty_content")


class ActionCancelledError(FeedError):
    """Viewer declined the confirmation prompt."""

    notify = False

    def __init__(self, message: str = "Acao cancelada"):
        super().__init__(message, "cancelled")


# ==============================================================================
# Confirmation port
# ==============================================================================


class Confirmation(Protocol):
    """Yes/no prompt answered outside the feed."""

    def confirm(self, prompt: str) -> bool:
        """Return True to go ahead with the destructive operation."""
        ...


class StaticConfirmation:
    """Confirmation with a fixed answer (e.g. from a request flag)."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer

    def confirm(self, prompt: str) -> bool:
        return self.answer


DELETE_POST_PROMPT = "Excluir esta postagem permanentemente?"
DELETE_COMMENT_PROMPT = "Deseja excluir seu comentário permanentemente?"


# ==============================================================================
# Outcomes
# ==============================================================================


@dataclass(frozen=True)
class ActionOutcome:
    """Result of a viewer intent."""

    success: bool
    code: str = "ok"
    message: str | None = None
    post: Post | None = None
    comment: Comment | None = None


# ==============================================================================
# Feed Controller
# ==============================================================================


class FeedController:
    """Entry point for every viewer intent on the feed."""

    def __init__(
        self,
        store: PostStore,
        notifier: Notifier,
        general_id: str = GENERAL_COMMUNITY_ID,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.general_id = general_id

    # --------------------------------------------------------------------------
    # Helpers
    # --------------------------------------------------------------------------

    @staticmethod
    def _viewer_scope(viewer: Viewer) -> RequestContext:
        """Scope in which logs and notifications belong to ``viewer``."""
        return RequestContext(request_id=get_request_id() or None, viewer_id=viewer.id)

    def _run(
        self,
        action: str,
        viewer: Viewer,
        fn: Callable[[], ActionOutcome],
        **fields: str,
    ) -> ActionOutcome:
        """Run an intent, converting failures into outcomes and notifications."""
        with self._viewer_scope(viewer):
            try:
                outcome = fn()
            except FeedError as e:
                logger.info("feed_action_rejected", action=action, code=e.code, **fields)
                if e.notify:
                    self.notifier.notify(e.message, NotificationKind.INFO)
                return ActionOutcome(success=False, code=e.code, message=e.message)
            except StorageError as e:
                logger.error(
                    "feed_action_storage_failed",
                    action=action,
                    code=e.code,
                    error=e.message,
                    **fields,
                )
                self.notifier.notify(e.message, NotificationKind.INFO)
                return ActionOutcome(success=False, code=e.code, message=e.message)

            logger.info("feed_action_completed", action=action, **fields)
            return outcome

    def _require_post(self, post_id: str) -> Post:
        post = self.store.get_post(post_id)
        if post is None:
            raise PostNotFoundError
        return post

    def _require_visible_post(self, viewer: Viewer, post_id: str) -> Post:
        post = self._require_post(post_id)
        if not can_interact(post, viewer.joined_communities, self.general_id):
            raise CommunityAccessError
        return post

    @staticmethod
    def _require_comment(post: Post, comment_id: str) -> Comment:
        comment = find_comment(post.comments, comment_id)
        if comment is None:
            raise CommentNotFoundError
        return comment

    @staticmethod
    def _require_content(content: str) -> str:
        content = content.strip()
        if not content:
            raise EmptyContentError
        return content

    @staticmethod
    def _require_confirmation(confirm: Confirmation, prompt: str) -> None:
        if not confirm.confirm(prompt):
            raise ActionCancelledError

    # --------------------------------------------------------------------------
    # Reading
    # --------------------------------------------------------------------------

    def feed(self, viewer: Viewer) -> tuple[Post, ...]:
        """Posts visible to the viewer, newest first.

        A storage failure yields an empty feed and a notification.
        """
        with self._viewer_scope(viewer):
            try:
                posts = self.store.posts
            except StorageError as e:
                logger.error("feed_load_failed", code=e.code, error=e.message)
                self.notifier.notify(e.message, NotificationKind.INFO)
                return ()
        return visible_posts(posts, viewer.joined_communities, self.general_id)

    # --------------------------------------------------------------------------
    # Posts
    # --------------------------------------------------------------------------

    def create_post(
        self, viewer: Viewer, community_id: str, content: str
    ) -> ActionOutcome:
        """Publish a post in a community the viewer belongs to."""

        def action() -> ActionOutcome:
            text = self._require_content(content)
            if community_id != self.general_id and not viewer.is_member(community_id):
                raise CommunityAccessError(
                    "Voce precisa participar do grupo para publicar nele"
                )
            post = make_post(
                community_id=community_id,
                author_id=viewer.id,
                author_name=viewer.name,
                content=text,
            )
            self.store.create_post(post)
            self.notifier.notify(
                "Postagem publicada com sucesso!", NotificationKind.SUCCESS
            )
            return ActionOutcome(success=True, post=post)

        return self._run("create_post", viewer, action, community_id=community_id)

    def delete_post(
        self,
        viewer: Viewer,
        post_id: str,
        confirm: Confirmation,
    ) -> ActionOutcome:
        """Delete one of the viewer's own posts, after confirmation."""

        def action() -> ActionOutcome:
            post = self._require_post(post_id)
            if post.author_id != viewer.id:
                raise PermissionDeniedError(
                    "Apenas o autor pode excluir esta postagem"
                )
            self._require_confirmation(confirm, DELETE_POST_PROMPT)
            self.store.delete_post(post_id, viewer.id)
            self.notifier.notify("Postagem removida.", NotificationKind.INFO)
            return ActionOutcome(success=True, post=post)

        return self._run("delete_post", viewer, action, post_id=post_id)

    def like_post(self, viewer: Viewer, post_id: str) -> ActionOutcome:
        """Like or unlike a visible post."""

        def action() -> ActionOutcome:
            post = self._require_visible_post(viewer, post_id)
            was_liked = post.is_liked_by(viewer.id)
            self.store.toggle_post_like(post_id, viewer.id)
            if not was_liked:
                self.notifier.notify(
                    f"Você curtiu a postagem de {post.author_name}",
                    NotificationKind.INFO,
                )
            return ActionOutcome(success=True, post=self.store.get_post(post_id))

        return self._run("like_post", viewer, action, post_id=post_id)

    # --------------------------------------------------------------------------
    # Comments
    # --------------------------------------------------------------------------

    def add_comment(self, viewer: Viewer, post_id: str, content: str) -> ActionOutcome:
        """Add a root comment to a visible post."""

        def action() -> ActionOutcome:
            text = self._require_content(content)
            post = self._require_visible_post(viewer, post_id)
            comment = create_comment(viewer.id, viewer.name, text)
            self.store.add_comment(post_id, comment)
            self.notifier.notify(
                f"{viewer.name} comentou na postagem de {post.author_name}",
                NotificationKind.SUCCESS,
            )
            return ActionOutcome(
                success=True, post=self.store.get_post(post_id), comment=comment
            )

        return self._run("add_comment", viewer, action, post_id=post_id)

    def add_reply(
        self, viewer: Viewer, post_id: str, parent_id: str, content: str
    ) -> ActionOutcome:
        """Reply to a comment (at any depth) of a visible post."""

        def action() -> ActionOutcome:
            text = self._require_content(content)
            post = self._require_visible_post(viewer, post_id)
            self._require_comment(post, parent_id)
            reply = create_comment(viewer.id, viewer.name, text)
            self.store.add_reply(post_id, parent_id, reply)
            self.notifier.notify("Sua resposta foi enviada.", NotificationKind.SUCCESS)
            return ActionOutcome(
                success=True, post=self.store.get_post(post_id), comment=reply
            )

        return self._run(
            "add_reply", viewer, action, post_id=post_id, parent_id=parent_id
        )

    def like_comment(
        self, viewer: Viewer, post_id: str, comment_id: str
    ) -> ActionOutcome:
        """Like or unlike a comment of a visible post."""

        def action() -> ActionOutcome:
            post = self._require_visible_post(viewer, post_id)
            self._require_comment(post, comment_id)
            self.store.like_comment(post_id, comment_id, viewer.id)
            updated = self.store.get_post(post_id)
            return ActionOutcome(
                success=True,
                post=updated,
                comment=find_comment(updated.comments, comment_id) if updated else None,
            )

        return self._run(
            "like_comment", viewer, action, post_id=post_id, comment_id=comment_id
        )

    def delete_comment(
        self,
        viewer: Viewer,
        post_id: str,
        comment_id: str,
        confirm: Confirmation,
    ) -> ActionOutcome:
        """Delete one of the viewer's comments and all replies under it."""

        def action() -> ActionOutcome:
            post = self._require_post(post_id)
            comment = self._require_comment(post, comment_id)
            if comment.author_id != viewer.id:
                raise PermissionDeniedError(
                    "Apenas o autor pode excluir este comentario"
                )
            self._require_confirmation(confirm, DELETE_COMMENT_PROMPT)
            self.store.delete_comment(post_id, comment_id, viewer.id)
            self.notifier.notify("Comentário excluído.", NotificationKind.INFO)
            return ActionOutcome(
                success=True, post=self.store.get_post(post_id), comment=comment
            )

        return self._run(
            "delete_comment", viewer, action, post_id=post_id, comment_id=comment_id
        )
