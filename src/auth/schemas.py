"""Pydantic schemas for sign-in and profiles."""

from pydantic import BaseModel, Field, field_validator

from src.communities.models import Condition

from .models import Profile


class SignInRequest(BaseModel):
    """Mocked sign-in request."""

    name: str = Field("", max_length=100)
    email: str = Field(..., min_length=3, max_length=254)
    conditions: list[Condition] = Field(default_factory=list)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Strip whitespace and check for an address shape."""
        v = v.strip()
        if "@" not in v:
            msg = "Email invalido"
            raise ValueError(msg)
        return v


class UpdateProfileRequest(BaseModel):
    """Profile update request."""

    name: str | None = Field(None, max_length=100)
    bio: str | None = Field(None, max_length=2000)
    conditions: list[Condition] | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        if not v:
            msg = "Name cannot be empty"
            raise ValueError(msg)
        return v


class ProfileResponse(BaseModel):
    """Profile data returned to its owner.

    Clients send ``id`` as ``X-Viewer-ID`` on later requests.
    """

    id: str
    name: str
    email: str
    bio: str
    conditions: list[Condition]
    avatar: str
    joined_communities: list[str]

    @classmethod
    def from_profile(cls, profile: Profile) -> "ProfileResponse":
        """Create response from Profile entity."""
        return cls(
            id=profile.id,
            name=profile.name,
            email=profile.email,
            bio=profile.bio,
            conditions=list(profile.conditions),
            avatar=profile.avatar,
            joined_communities=list(profile.joined_communities),
        )
