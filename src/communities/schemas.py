"""Pydantic schemas for communities."""

from pydantic import BaseModel, Field, field_validator

from src.auth.models import Viewer

from .models import Community, Condition


class CreateCommunityRequest(BaseModel):
    """Request to create a community."""

    name: str = Field(..., min_length=1, max_length=120)
    description: str = Field("", max_length=2000)
    condition: Condition = Condition.OTHER

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip whitespace and validate name."""
        v = v.strip()
        if not v:
            msg = "Name cannot be empty"
            raise ValueError(msg)
        return v


class CommunityResponse(BaseModel):
    """Response for a single community."""

    id: str
    name: str
    description: str
    condition: Condition
    creator_id: str
    members_count: int
    tags: list[str]
    is_member: bool = False

    @classmethod
    def from_community(
        cls, community: Community, viewer: Viewer | None = None
    ) -> "CommunityResponse":
        """Create response from Community entity."""
        return cls(
            id=community.id,
            name=community.name,
            description=community.description,
            condition=community.condition,
            creator_id=community.creator_id,
            members_count=community.members_count,
            tags=list(community.tags),
            is_member=viewer is not None and viewer.is_member(community.id),
        )


class CommunityListResponse(BaseModel):
    """List of communities."""

    items: list[CommunityResponse]
    total: int


class MembershipResponse(BaseModel):
    """Viewer membership after a join/leave or create.

    Clients send ``joined_communities`` back in the ``X-Viewer-Communities``
    header on later requests.
    """

    community_id: str
    is_member: bool
    joined_communities: list[str]
    community: CommunityResponse | None = None
