"""Storage module: persistence port and adapters for feed collections."""

from src.storage.repository import (
    CommunityRepository,
    CorruptDataError,
    InMemoryRepository,
    JsonFileRepository,
    PersistenceError,
    PostRepository,
    ProfileRepository,
    Repository,
    StorageError,
    json_community_repository,
    json_post_repository,
    json_profile_repository,
)
from src.storage.seed import DEMO_COMMUNITIES, DEMO_POSTS


__all__ = [
    "DEMO_COMMUNITIES",
    "DEMO_POSTS",
    "CommunityRepository",
    "CorruptDataError",
    "InMemoryRepository",
    "JsonFileRepository",
    "PersistenceError",
    "PostRepository",
    "ProfileRepository",
    "Repository",
    "StorageError",
    "json_community_repository",
    "json_post_repository",
    "json_profile_repository",
]
