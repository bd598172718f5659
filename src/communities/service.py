"""Community service layer.

Business logic for:
- Listing and creating communities
- Joining/leaving a community (membership toggle with member counts)
- Display names for feed posts
"""

import threading
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import TYPE_CHECKING

import structlog

from src.auth.models import GENERAL_COMMUNITY_ID, Viewer

from .models import Community, Condition, make_community


if TYPE_CHECKING:
    from src.storage.repository import CommunityRepository


logger = structlog.get_logger(__name__)

CommunityCollection = tuple[Community, ...]


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class CommunityError(Exception):
    """Base community error."""

    def __init__(self, message: str, code: str = "community_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class CommunityNotFoundError(CommunityError):
    """Community not found."""

    def __init__(self, message: str = "Grupo nao encontrado"):
        super().__init__(message, "community_not_found")


class InvalidCommunityError(CommunityError):
    """Community data rejected."""

    def __init__(self, message: str = "Dados do grupo invalidos"):
        super().__init__(message, "invalid_community")


# ==============================================================================
# Pure operations
# ==============================================================================


def community_label(
    community_id: str,
    communities: Sequence[Community],
    general_id: str = GENERAL_COMMUNITY_ID,
    general_label: str = "Geral",
) -> str:
    """Display name of a community id."""
    if community_id == general_id:
        return general_label
    for community in communities:
        if community.id == community_id:
            return community.name
    return f"Grupo {community_id}"


def toggle_membership(
    communities: Sequence[Community],
    joined: Sequence[str],
    community_id: str,
) -> tuple[CommunityCollection, tuple[str, ...]]:
    """Join or leave ``community_id``.

    Returns the communities with the member count adjusted and the new list of
    joined ids. Counts never go below zero.
    """
    is_member = community_id in joined
    delta = -1 if is_member else 1
    updated = tuple(
        replace(c, members_count=max(c.members_count + delta, 0))
        if c.id == community_id
        else c
        for c in communities
    )
    if is_member:
        new_joined = tuple(cid for cid in joined if cid != community_id)
    else:
        new_joined = (*joined, community_id)
    return updated, new_joined


# ==============================================================================
# Community Service
# ==============================================================================


class CommunityService:
    """Service owning the community collection.

    Load, create and membership changes run under one lock so concurrent
    requests never overwrite each other's member counts.
    """

    def __init__(
        self,
        repository: "CommunityRepository",
        seed: Sequence[Community] | None = None,
        general_id: str = GENERAL_COMMUNITY_ID,
        general_label: str = "Geral",
    ) -> None:
        self.repository = repository
        self.seed = tuple(seed or ())
        self.general_id = general_id
        self.general_label = general_label
        self._communities: CommunityCollection | None = None
        self._lock = threading.RLock()

    @property
    def communities(self) -> CommunityCollection:
        """Current collection, loaded (and seeded when empty) on first access."""
        with self._lock:
            if self._communities is None:
                communities = tuple(self.repository.load())
                if not communities and self.seed:
                    communities = self.seed
                    self.repository.save(communities)
                    logger.info("communities_seeded", community_count=len(communities))
                self._communities = communities
            return self._communities

    def _save(
        self,
        transform: Callable[[CommunityCollection], CommunityCollection],
    ) -> CommunityCollection:
        """Persist ``transform(current)`` unless it leaves the collection as is."""
        with self._lock:
            current = self.communities
            updated = transform(current)
            if updated != current:
                self.repository.save(updated)
                self._communities = updated
            return updated

    def get_community(self, community_id: str) -> Community | None:
        """Return the community with ``community_id`` or None."""
        return next((c for c in self.communities if c.id == community_id), None)

    def label(self, community_id: str) -> str:
        """Display name of a community id."""
        return community_label(
            community_id, self.communities, self.general_id, self.general_label
        )

    def create_community(
        self,
        viewer: Viewer,
        name: str,
        description: str,
        condition: Condition = Condition.OTHER,
    ) -> tuple[Community, Viewer]:
        """Create a community; the creator joins it immediately.

        Raises:
            InvalidCommunityError: If the name is blank
        """
        name = name.strip()
        if not name:
            raise InvalidCommunityError("O nome do grupo nao pode ser vazio")

        community = make_community(
            name=name,
            description=description.strip(),
            condition=condition,
            creator_id=viewer.id,
        )
        self._save(lambda communities: (community, *communities))
        logger.info(
            "community_created",
            community_id=community.id,
            condition=condition.value,
        )
        return community, viewer.with_communities(
            (*viewer.joined_communities, community.id)
        )

    def toggle_membership(self, viewer: Viewer, community_id: str) -> Viewer:
        """Join or leave a community and return the updated viewer.

        Raises:
            InvalidCommunityError: If the community is the general one
            CommunityNotFoundError: If the community does not exist
        """
        if community_id == self.general_id:
            raise InvalidCommunityError("Nao e possivel sair do grupo Geral")

        with self._lock:
            if self.get_community(community_id) is None:
                raise CommunityNotFoundError

            communities, joined = toggle_membership(
                self.communities, viewer.joined_communities, community_id
            )
            self._save(lambda _: communities)

        logger.info(
            "community_membership_toggled",
            community_id=community_id,
            joined=community_id in joined,
        )
        return viewer.with_communities(joined)
