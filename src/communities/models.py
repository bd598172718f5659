"""Community model.

Communities group posts by support topic. The feed shows a post only to
viewers who joined its community, except for the general community, which
everyone sees.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from src.comments.models import generate_id


class Condition(str, Enum):
    """Support topic a community is dedicated to."""

    DEPRESSION = "Depressão"
    ANXIETY = "Ansiedade"
    ADHD = "TDAH"
    ASD = "TEA"
    OTHER = "Outro"


@dataclass(frozen=True)
class Community:
    """Community entity."""

    id: str
    name: str
    description: str
    condition: Condition
    creator_id: str
    members_count: int = 0
    tags: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Community":
        """Create Community from stored data."""
        try:
            condition = Condition(data.get("condition"))
        except ValueError:
            condition = Condition.OTHER
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            description=data.get("description", ""),
            condition=condition,
            creator_id=str(data.get("creatorId", "")),
            members_count=max(int(data.get("membersCount") or 0), 0),
            tags=tuple(data.get("tags") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "condition": self.condition.value,
            "creatorId": self.creator_id,
            "membersCount": self.members_count,
            "tags": list(self.tags),
        }


def make_community(
    name: str,
    description: str,
    condition: Condition,
    creator_id: str,
    community_id: str | None = None,
) -> Community:
    """Create a community whose only member is its creator."""
    return Community(
        id=community_id or f"c_{generate_id()[:9]}",
        name=name,
        description=description,
        condition=condition,
        creator_id=creator_id,
        members_count=1,
        tags=(condition.value,),
    )
