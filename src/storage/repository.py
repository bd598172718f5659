"""Persistence port and adapters for the post, community and profile collections.

A repository loads and saves a whole collection at once. The JSON adapter
writes to a temporary file next to the target and swaps it in with
``os.replace``, so readers never observe a partially written file.
"""

import os
import tempfile
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Generic, Protocol, TypeVar

import orjson
import structlog

from src.auth.models import Profile
from src.communities.models import Community
from src.posts.models import Post


logger = structlog.get_logger(__name__)

T = TypeVar("T")


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class StorageError(Exception):
    """Base error for storage operations."""

    def __init__(self, message: str, code: str = "storage_error") -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class PersistenceError(StorageError):
    """Collection could not be written."""

    def __init__(self, message: str = "Nao foi possivel salvar os dados") -> None:
        super().__init__(message, "persistence_failed")


class CorruptDataError(StorageError):
    """Stored collection could not be read back."""

    def __init__(self, message: str = "Dados armazenados corrompidos") -> None:
        super().__init__(message, "corrupt_data")


# ==============================================================================
# Ports
# ==============================================================================


class Repository(Protocol[T]):
    """Load/save port for one collection."""

    def load(self) -> list[T]:
        """Return the stored collection (empty when nothing is stored)."""
        ...

    def save(self, items: Sequence[T]) -> None:
        """Replace the stored collection."""
        ...


PostRepository = Repository[Post]
CommunityRepository = Repository[Community]
ProfileRepository = Repository[Profile]


# ==============================================================================
# Adapters
# ==============================================================================


class JsonFileRepository(Generic[T]):
    """Repository storing a collection as a JSON array in one file."""

    def __init__(
        self,
        path: Path | str,
        from_dict: Callable[[dict[str, Any]], T],
        to_dict: Callable[[T], dict[str, Any]],
    ) -> None:
        self.path = Path(path)
        self.from_dict = from_dict
        self.to_dict = to_dict

    def load(self) -> list[T]:
        """Read the collection; a missing file is an empty collection."""
        if not self.path.exists():
            return []
        try:
            raw = orjson.loads(self.path.read_bytes())
        except (OSError, orjson.JSONDecodeError) as e:
            logger.error("storage_read_failed", path=str(self.path), error=str(e))
            raise CorruptDataError from e

        if not isinstance(raw, list):
            logger.error("storage_unexpected_shape", path=str(self.path))
            raise CorruptDataError

        try:
            return [self.from_dict(item) for item in raw]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error("storage_decode_failed", path=str(self.path), error=str(e))
            raise CorruptDataError from e

    def save(self, items: Sequence[T]) -> None:
        """Atomically replace the file with ``items``."""
        payload = orjson.dumps(
            [self.to_dict(item) for item in items], option=orjson.OPT_INDENT_2
        )
        tmp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(payload)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error("storage_write_failed", path=str(self.path), error=str(e))
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise PersistenceError from e
        logger.debug("storage_written", path=str(self.path), item_count=len(items))


class InMemoryRepository(Generic[T]):
    """Repository keeping the collection in process memory."""

    def __init__(self, items: Sequence[T] | None = None) -> None:
        self.items: list[T] = list(items or ())
        self.save_count = 0

    def load(self) -> list[T]:
        """Return a copy of the stored collection."""
        return list(self.items)

    def save(self, items: Sequence[T]) -> None:
        """Replace the stored collection."""
        self.items = list(items)
        self.save_count += 1


def json_post_repository(path: Path | str) -> JsonFileRepository[Post]:
    """JSON file repository for posts."""
    return JsonFileRepository(path, Post.from_dict, Post.to_dict)


def json_community_repository(path: Path | str) -> JsonFileRepository[Community]:
    """JSON file repository for communities."""
    return JsonFileRepository(path, Community.from_dict, Community.to_dict)


def json_profile_repository(path: Path | str) -> JsonFileRepository[Profile]:
    """JSON file repository for user profiles."""
    return JsonFileRepository(path, Profile.from_dict, Profile.to_dict)
