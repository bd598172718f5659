"""Tests for the feed controller."""

import inspect
from unittest.mock import MagicMock

import pytest

from src.comments.tree import find_comment
from src.core.context import get_viewer_id
from src.feed.service import FeedController, StaticConfirmation
from src.notifications.models import NotificationKind
from src.posts.store import PostStore
from src.storage.repository import CorruptDataError, PersistenceError


YES = StaticConfirmation(True)


def messages(inbox, viewer) -> list[str]:
    return [n.message for n in inbox.drain(viewer.id)]


class TestFeed:
    """Tests for FeedController.feed."""

    def test_feed_is_filtered(self, controller, ana) -> None:
        assert [post.id for post in controller.feed(ana)] == ["p2", "p1"]

    def test_outsider_feed(self, controller, outsider) -> None:
        assert [post.id for post in controller.feed(outsider)] == ["p2", "p3"]

    def test_unreadable_storage_gives_empty_feed(self, inbox, ana) -> None:
        repository = MagicMock()
        repository.load.side_effect = CorruptDataError()
        controller = FeedController(PostStore(repository), inbox)

        assert controller.feed(ana) == ()
        assert messages(inbox, ana) == ["Dados armazenados corrompidos"]


class TestCreatePost:
    """Tests for FeedController.create_post."""

    def test_publish_in_joined_community(self, controller, inbox, ana) -> None:
        outcome = controller.create_post(ana, "g1", "  Respirar fundo  ")

        assert outcome.success
        assert outcome.post.content == "Respirar fundo"
        assert outcome.post.author_id == "u1"
        assert controller.store.posts[0] == outcome.post
        notices = inbox.drain(ana.id)
        assert [(n.message, n.kind) for n in notices] == [
            ("Postagem publicada com sucesso!", NotificationKind.SUCCESS)
        ]

    def test_publish_in_general_without_membership(self, controller, outsider) -> None:
        assert controller.create_post(outsider, "general", "Oi").success

    def test_blank_content_is_discarded(self, controller, inbox, post_repository, ana) -> None:
        """Blank text changes nothing and sends no notification."""
        outcome = controller.create_post(ana, "g1", "   ")

        assert not outcome.success
        assert outcome.code == "empty_content"
        assert inbox.pending(ana.id) == []
        assert post_repository.save_count == 0

    def test_community_not_joined(self, controller, inbox, ana) -> None:
        outcome = controller.create_post(ana, "g2", "Oi")

        assert outcome.code == "community_access_denied"
        assert len(inbox.pending(ana.id)) == 1


class TestDeletePost:
    """Tests for FeedController.delete_post."""

    def test_author_deletes(self, controller, inbox, ana) -> None:
        outcome = controller.delete_post(ana, "p1", YES)

        assert outcome.success
        assert controller.store.get_post("p1") is None
        assert messages(inbox, ana) == ["Postagem removida."]

    def test_non_author_is_denied(self, controller, post_repository, marcos) -> None:
        outcome = controller.delete_post(marcos, "p1", YES)

        assert outcome.code == "permission_denied"
        assert controller.store.get_post("p1") is not None
        assert post_repository.save_count == 0

    def test_declined_confirmation(self, controller, inbox, ana) -> None:
        """Declining the prompt leaves the post and stays silent."""
        outcome = controller.delete_post(ana, "p1", StaticConfirmation(False))

        assert outcome.code == "cancelled"
        assert controller.store.get_post("p1") is not None
        assert inbox.pending(ana.id) == []

    def test_confirmation_has_no_default(self, controller, ana) -> None:
        """Deleting without an answer to the prompt is not possible."""
        for method in (controller.delete_post, controller.delete_comment):
            parameter = inspect.signature(method).parameters["confirm"]
            assert parameter.default is inspect.Parameter.empty

        with pytest.raises(TypeError):
            controller.delete_post(ana, "p1")

        assert controller.store.get_post("p1") is not None

    def test_prompt_is_not_shown_to_non_author(self, controller, marcos) -> None:
        confirm = MagicMock()

        controller.delete_post(marcos, "p1", confirm)

        confirm.confirm.assert_not_called()

    def test_unknown_post(self, controller, inbox, ana) -> None:
        outcome = controller.delete_post(ana, "nope", YES)

        assert outcome.code == "post_not_found"
        assert messages(inbox, ana) == ["Postagem nao encontrada"]


class TestLikePost:
    """Tests for FeedController.like_post."""

    def test_like_notifies_with_author(self, controller, inbox, ana) -> None:
        outcome = controller.like_post(ana, "p2")

        assert outcome.post.likes == 1
        assert outcome.post.is_liked_by("u1")
        assert messages(inbox, ana) == ["Você curtiu a postagem de Marcos"]

    def test_unlike_is_silent(self, controller, inbox, ana) -> None:
        controller.like_post(ana, "p2")
        inbox.drain(ana.id)

        outcome = controller.like_post(ana, "p2")

        assert outcome.post.likes == 0
        assert inbox.pending(ana.id) == []

    def test_invisible_post(self, controller, ana) -> None:
        """Posts in communities the viewer did not join cannot be liked."""
        outcome = controller.like_post(ana, "p3")

        assert outcome.code == "community_access_denied"
        assert controller.store.get_post("p3").likes == 0


class TestComments:
    """Tests for comment, reply and comment-like intents."""

    def test_add_comment(self, controller, inbox, marcos) -> None:
        outcome = controller.add_comment(marcos, "p1", "Força!")

        assert outcome.success
        assert outcome.post.comments[-1] == outcome.comment
        assert outcome.comment.author_name == "Marcos"
        assert messages(inbox, marcos) == ["Marcos comentou na postagem de Ana"]

    def test_add_comment_blank(self, controller, inbox, marcos) -> None:
        outcome = controller.add_comment(marcos, "p1", "\n  ")

        assert outcome.code == "empty_content"
        assert inbox.pending(marcos.id) == []

    def test_add_comment_not_visible(self, controller, outsider) -> None:
        assert controller.add_comment(outsider, "p1", "Oi").code == "community_access_denied"

    def test_add_reply_deep(self, controller, inbox, ana) -> None:
        outcome = controller.add_reply(ana, "p1", "r2", "Obrigada")

        assert outcome.success
        r2 = find_comment(outcome.post.comments, "r2")
        assert r2.replies == (outcome.comment,)
        assert messages(inbox, ana) == ["Sua resposta foi enviada."]

    def test_add_reply_unknown_parent(self, controller, ana) -> None:
        outcome = controller.add_reply(ana, "p1", "gone", "Oi")

        assert outcome.code == "comment_not_found"

    def test_like_comment_is_silent(self, controller, inbox, ana) -> None:
        outcome = controller.like_comment(ana, "p1", "r1")

        assert outcome.comment.liked_by == ("u1",)
        assert inbox.pending(ana.id) == []

    def test_like_comment_twice_restores(self, controller, ana) -> None:
        before = controller.store.get_post("p1")

        controller.like_comment(ana, "p1", "r2")
        controller.like_comment(ana, "p1", "r2")

        assert controller.store.get_post("p1") == before


class TestDeleteComment:
    """Tests for FeedController.delete_comment."""

    def test_author_deletes_subtree(self, controller, inbox, marcos) -> None:
        outcome = controller.delete_comment(marcos, "p1", "r1", YES)

        assert outcome.success
        assert find_comment(outcome.post.comments, "r1") is None
        assert find_comment(outcome.post.comments, "r2") is None
        assert messages(inbox, marcos) == ["Comentário excluído."]

    def test_non_author_is_denied(self, controller, ana) -> None:
        outcome = controller.delete_comment(ana, "p1", "r1", YES)

        assert outcome.code == "permission_denied"
        assert find_comment(controller.store.get_post("p1").comments, "r1")

    def test_declined(self, controller, marcos) -> None:
        outcome = controller.delete_comment(marcos, "p1", "r1", StaticConfirmation(False))

        assert outcome.code == "cancelled"

    def test_unknown_comment(self, controller, ana) -> None:
        assert controller.delete_comment(ana, "p1", "zzz", YES).code == "comment_not_found"


class TestViewerScope:
    """Each action runs in the acting viewer's context."""

    def test_notices_reach_only_the_actor(self, controller, inbox, ana, marcos) -> None:
        controller.like_post(ana, "p2")

        assert inbox.pending(marcos.id) == []
        assert messages(inbox, ana) == ["Você curtiu a postagem de Marcos"]

    def test_context_is_restored(self, controller, ana) -> None:
        before = get_viewer_id()

        controller.like_post(ana, "p2")

        assert get_viewer_id() == before

    def test_viewer_is_bound_during_action(self, post_store, ana) -> None:
        seen = []
        notifier = MagicMock()
        notifier.notify.side_effect = lambda *args: seen.append(get_viewer_id())

        FeedController(post_store, notifier).like_post(ana, "p2")

        assert seen == ["u1"]


class TestStorageFailure:
    """Persistence failures become outcomes and notifications."""

    @pytest.fixture
    def failing_controller(self, posts, inbox) -> FeedController:
        repository = MagicMock()
        repository.load.return_value = list(posts)
        repository.save.side_effect = PersistenceError()
        return FeedController(PostStore(repository), inbox)

    def test_save_failure(self, failing_controller, inbox, ana) -> None:
        outcome = failing_controller.like_post(ana, "p2")

        assert not outcome.success
        assert outcome.code == "persistence_failed"
        assert failing_controller.store.get_post("p2").likes == 0
        assert messages(inbox, ana) == ["Nao foi possivel salvar os dados"]
