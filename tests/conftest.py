"""Shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from src.auth.models import Profile, Viewer
from src.comments.models import Comment
from src.communities.models import Community, Condition
from src.config import Settings
from src.feed.service import FeedController
from src.main import create_app
from src.notifications.service import InboxNotifier
from src.posts.models import Post
from src.posts.store import PostStore
from src.storage.repository import InMemoryRepository


@pytest.fixture
def settings() -> Settings:
    """Settings for an isolated in-memory application."""
    return Settings(
        environment="testing",
        storage_backend="memory",
        seed_demo_data=False,
        log_requests=False,
    )


@pytest.fixture
def thread() -> tuple[Comment, ...]:
    """Forest: c1 -> r1 -> r2, c1 -> r3, and a second root c2."""
    r2 = Comment(id="r2", author_id="u3", author_name="Bia", content="r2", created_at="t")
    r1 = Comment(
        id="r1",
        author_id="u2",
        author_name="Marcos",
        content="r1",
        created_at="t",
        replies=(r2,),
    )
    r3 = Comment(id="r3", author_id="u1", author_name="Ana", content="r3", created_at="t")
    c1 = Comment(
        id="c1",
        author_id="u1",
        author_name="Ana",
        content="c1",
        created_at="t",
        liked_by=("u2",),
        replies=(r1, r3),
    )
    c2 = Comment(id="c2", author_id="u2", author_name="Marcos", content="c2", created_at="t")
    return (c1, c2)


@pytest.fixture
def posts(thread: tuple[Comment, ...]) -> tuple[Post, ...]:
    """Collection, newest first: p2 (general), p1 (g1, with thread), p3 (g2)."""
    return (
        Post(
            id="p2",
            community_id="general",
            author_id="u2",
            author_name="Marcos",
            content="Bom dia a todos",
            created_at="t",
        ),
        Post(
            id="p1",
            community_id="g1",
            author_id="u1",
            author_name="Ana",
            content="Meditar ajuda",
            created_at="t",
            comments=thread,
        ),
        Post(
            id="p3",
            community_id="g2",
            author_id="u3",
            author_name="Bia",
            content="Organizei a mesa",
            created_at="t",
        ),
    )


@pytest.fixture
def post_repository(posts: tuple[Post, ...]) -> InMemoryRepository[Post]:
    """In-memory post repository preloaded with ``posts``."""
    return InMemoryRepository(posts)


@pytest.fixture
def post_store(post_repository: InMemoryRepository[Post]) -> PostStore:
    """Post store over the in-memory repository."""
    return PostStore(post_repository)


@pytest.fixture
def inbox() -> InboxNotifier:
    """Notification inbox."""
    return InboxNotifier()


@pytest.fixture
def controller(post_store: PostStore, inbox: InboxNotifier) -> FeedController:
    """Feed controller reporting to ``inbox``."""
    return FeedController(post_store, inbox)


@pytest.fixture
def ana() -> Viewer:
    """Member of g1, author of p1, c1 and r3."""
    return Viewer(id="u1", name="Ana", joined_communities=("general", "g1"))


@pytest.fixture
def marcos() -> Viewer:
    """Member of g1, author of p2, r1 and c2."""
    return Viewer(id="u2", name="Marcos", joined_communities=("general", "g1"))


@pytest.fixture
def outsider() -> Viewer:
    """Viewer who only joined g2."""
    return Viewer(id="u9", name="Caio", joined_communities=("g2",))


@pytest.fixture
def communities() -> tuple[Community, ...]:
    """Two communities."""
    return (
        Community(
            id="g1",
            name="Ansiedade Zero",
            description="Respiração e apoio",
            condition=Condition.ANXIETY,
            creator_id="u1",
            members_count=2,
            tags=("Calma",),
        ),
        Community(
            id="g2",
            name="Foco no TDAH",
            description="Organização",
            condition=Condition.ADHD,
            creator_id="u3",
            members_count=1,
        ),
    )


@pytest.fixture
def profiles() -> tuple[Profile, ...]:
    """One signed-up viewer (u4) who joined g2."""
    return (
        Profile(
            id="u4",
            name="Lucia",
            email="lucia@vivamente.app",
            bio="Um dia de cada vez.",
            conditions=(Condition.ANXIETY,),
            avatar="https://picsum.photos/seed/lucia@vivamente.app/200",
            joined_communities=("general", "g2"),
        ),
    )


@pytest.fixture
def profile_repository(profiles: tuple[Profile, ...]) -> InMemoryRepository[Profile]:
    return InMemoryRepository(profiles)


@pytest.fixture
def client(
    settings: Settings,
    posts: tuple[Post, ...],
    communities: tuple[Community, ...],
    profile_repository: InMemoryRepository[Profile],
) -> TestClient:
    """Test client over an in-memory application."""
    app = create_app(
        settings,
        post_repository=InMemoryRepository(posts),
        community_repository=InMemoryRepository(communities),
        profile_repository=profile_repository,
    )
    return TestClient(app)
