"""Community API endpoints.

Provides routes for:
- Listing communities
- Creating a community
- Joining/leaving a community
"""

import structlog
from fastapi import APIRouter, status

from src.auth.dependencies import (
    CurrentViewer,
    OptionalProfileServiceDep,
    OptionalViewer,
)
from src.auth.models import Viewer
from src.auth.service import ProfileService
from src.storage.repository import StorageError

from .dependencies import CommunityServiceDep, handle_community_error
from .schemas import (
    CommunityListResponse,
    CommunityResponse,
    CreateCommunityRequest,
    MembershipResponse,
)
from .service import CommunityError


logger = structlog.get_logger(__name__)


router = APIRouter(prefix="/v1/communities", tags=["communities"])


def _record_membership(profiles: ProfileService | None, viewer: Viewer) -> None:
    """Copy the new membership list into the viewer's stored profile."""
    if profiles is None:
        return
    profiles.record_membership(viewer.id, viewer.joined_communities)


@router.get("", response_model=CommunityListResponse, summary="List communities")
def list_communities(
    service: CommunityServiceDep,
    viewer: OptionalViewer,
) -> CommunityListResponse:
    """List every community, newest first."""
    items = [
        CommunityResponse.from_community(c, viewer) for c in service.communities
    ]
    return CommunityListResponse(items=items, total=len(items))


@router.post(
    "",
    response_model=MembershipResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create community",
)
def create_community(
    data: CreateCommunityRequest,
    service: CommunityServiceDep,
    viewer: CurrentViewer,
    profiles: OptionalProfileServiceDep,
) -> MembershipResponse:
    """Create a community; the creator becomes its first member."""
    try:
        community, updated = service.create_community(
            viewer, data.name, data.description, data.condition
        )
        _record_membership(profiles, updated)
    except CommunityError as e:
        raise handle_community_error(e) from e
    except StorageError as e:
        logger.error("community_create_failed", error=e.message)
        raise handle_community_error(CommunityError(e.message, e.code)) from e

    return MembershipResponse(
        community_id=community.id,
        is_member=True,
        joined_communities=list(updated.joined_communities),
        community=CommunityResponse.from_community(community, updated),
    )


@router.post(
    "/{community_id}/membership",
    response_model=MembershipResponse,
    summary="Join or leave community",
)
def toggle_membership(
    community_id: str,
    service: CommunityServiceDep,
    viewer: CurrentViewer,
    profiles: OptionalProfileServiceDep,
) -> MembershipResponse:
    """Join the community if not a member, otherwise leave it."""
    try:
        updated = service.toggle_membership(viewer, community_id)
        _record_membership(profiles, updated)
    except CommunityError as e:
        raise handle_community_error(e) from e
    except StorageError as e:
        logger.error("community_membership_failed", error=e.message)
        raise handle_community_error(CommunityError(e.message, e.code)) from e

    community = service.get_community(community_id)
    return MembershipResponse(
        community_id=community_id,
        is_member=updated.is_member(community_id),
        joined_communities=list(updated.joined_communities),
        community=CommunityResponse.from_community(community, updated)
        if community
        else None,
    )
