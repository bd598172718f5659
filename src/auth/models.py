"""Viewer identity and profiles.

The feed performs no credential checks. A viewer is an already-resolved
identity handed over by the (mocked) session layer, together with the ids of
the communities the viewer joined.

A profile is what the mocked sign-in creates: the viewer's display data
(e-mail, bio, avatar, support conditions) and stored membership list.
"""

from dataclasses import dataclass
from typing import Any

from src.comments.models import generate_id
from src.communities.models import Condition


GENERAL_COMMUNITY_ID = "general"

DEFAULT_NAME = "Usuário Teste"
DEFAULT_BIO = "Bem-vindo ao meu perfil!"
AVATAR_URL = "https://picsum.photos/seed/{seed}/200"


@dataclass(frozen=True)
class Viewer:
    """The person using the feed."""

    id: str
    name: str
    joined_communities: tuple[str, ...] = (GENERAL_COMMUNITY_ID,)

    def is_member(self, community_id: str) -> bool:
        """Check whether the viewer joined ``community_id``."""
        return community_id in self.joined_communities

    def with_communities(self, joined: tuple[str, ...]) -> "Viewer":
        """Copy of this viewer with a new membership list."""
        return Viewer(id=self.id, name=self.name, joined_communities=joined)


def normalize_conditions(conditions: Any) -> tuple[Condition, ...]:
    """Distinct known conditions in first-seen order; unknown values are dropped."""
    result: list[Condition] = []
    for value in conditions or ():
        try:
            condition = Condition(value)
        except ValueError:
            continue
        if condition not in result:
            result.append(condition)
    return tuple(result)


@dataclass(frozen=True)
class Profile:
    """Stored user profile."""

    id: str
    name: str
    email: str
    bio: str = DEFAULT_BIO
    conditions: tuple[Condition, ...] = (Condition.OTHER,)
    avatar: str = ""
    joined_communities: tuple[str, ...] = (GENERAL_COMMUNITY_ID,)

    def to_viewer(self) -> Viewer:
        """Viewer acting with this profile's name and memberships."""
        return Viewer(
            id=self.id,
            name=self.name,
            joined_communities=self.joined_communities,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create Profile from stored data."""
        return cls(
            id=str(data["id"]),
            name=data.get("name") or DEFAULT_NAME,
            email=data.get("email", ""),
            bio=data.get("bio", ""),
            conditions=normalize_conditions(data.get("conditions")),
            avatar=data.get("avatar", ""),
            joined_communities=tuple(
                dict.fromkeys(data.get("joinedCommunities") or (GENERAL_COMMUNITY_ID,))
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "bio": self.bio,
            "conditions": [c.value for c in self.conditions],
            "avatar": self.avatar,
            "joinedCommunities": list(self.joined_communities),
        }


def make_profile(
    name: str,
    email: str,
    conditions: tuple[Condition, ...] = (),
    profile_id: str | None = None,
) -> Profile:
    """Create the profile of a freshly signed-in user.

    Blank names fall back to a placeholder and an empty condition list to
    ``Condition.OTHER``. Every new user starts in the general community.
    """
    email = email.strip()
    return Profile(
        id=profile_id or generate_id()[:9],
        name=name.strip() or DEFAULT_NAME,
        email=email,
        bio=DEFAULT_BIO,
        conditions=normalize_conditions(conditions) or (Condition.OTHER,),
        avatar=AVATAR_URL.format(seed=email or "anon"),
        joined_communities=(GENERAL_COMMUNITY_ID,),
    )
