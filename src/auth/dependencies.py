"""FastAPI dependencies for the mocked viewer session.

The viewer is read from request headers set by the client after its mocked
sign-in:
- ``X-Viewer-ID``: viewer id (required)
- ``X-Viewer-Name``: display name
- ``X-Viewer-Communities``: comma-separated joined community ids

When the viewer has a stored profile, missing name and communities headers
are filled in from it.
"""

from typing import Annotated

import structlog
from fastapi import Depends, HTTPException, Request, status

from src.auth.models import GENERAL_COMMUNITY_ID, Viewer
from src.auth.service import ProfileError, ProfileService
from src.core.context import set_viewer_id
from src.storage.repository import StorageError


logger = structlog.get_logger(__name__)

VIEWER_ID_HEADER = "X-Viewer-ID"
VIEWER_NAME_HEADER = "X-Viewer-Name"
VIEWER_COMMUNITIES_HEADER = "X-Viewer-Communities"


def parse_communities(raw: str | None) -> tuple[str, ...]:
    """Split the communities header into distinct ids, keeping order.

    A missing header means the default membership (general only).
    """
    if raw is None:
        return (GENERAL_COMMUNITY_ID,)
    ids = (part.strip() for part in raw.split(","))
    return tuple(dict.fromkeys(cid for cid in ids if cid))


def get_profile_service_optional(request: Request) -> ProfileService | None:
    """Get profile service from app state, or None when profiles are off."""
    return getattr(request.app.state, "profile_service", None)


def get_profile_service(request: Request) -> ProfileService:
    """Get profile service from app state."""
    service = get_profile_service_optional(request)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Servico de perfis nao disponivel",
        )
    return service


ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
OptionalProfileServiceDep = Annotated[
    ProfileService | None, Depends(get_profile_service_optional)
]


def get_current_viewer_optional(request: Request) -> Viewer | None:
    """Get the viewer from headers, or None when no viewer id was sent."""
    viewer_id = (request.headers.get(VIEWER_ID_HEADER) or "").strip()
    if not viewer_id:
        return None

    set_viewer_id(viewer_id)
    service = get_profile_service_optional(request)
    try:
        profile = service.get_profile(viewer_id) if service else None
    except StorageError as e:
        logger.warning("viewer_profile_unavailable", code=e.code, error=e.message)
        profile = None

    name = (request.headers.get(VIEWER_NAME_HEADER) or "").strip()
    raw_communities = request.headers.get(VIEWER_COMMUNITIES_HEADER)
    if profile is not None:
        return Viewer(
            id=viewer_id,
            name=name or profile.name,
            joined_communities=profile.joined_communities
            if raw_communities is None
            else parse_communities(raw_communities),
        )
    return Viewer(
        id=viewer_id,
        name=name or "Usuário",
        joined_communities=parse_communities(raw_communities),
    )


def get_current_viewer(
    viewer: Annotated[Viewer | None, Depends(get_current_viewer_optional)],
) -> Viewer:
    """Get the viewer, rejecting anonymous requests."""
    if viewer is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Sessao nao iniciada",
        )
    return viewer


CurrentViewer = Annotated[Viewer, Depends(get_current_viewer)]
OptionalViewer = Annotated[Viewer | None, Depends(get_current_viewer_optional)]


def handle_profile_error(error: ProfileError) -> HTTPException:
    """Convert profile errors to HTTP exceptions."""
    status_map = {
        "profile_not_found": status.HTTP_404_NOT_FOUND,
        "invalid_profile": status.HTTP_400_BAD_REQUEST,
        "persistence_failed": status.HTTP_503_SERVICE_UNAVAILABLE,
        "corrupt_data": status.HTTP_503_SERVICE_UNAVAILABLE,
    }
    return HTTPException(
        status_code=status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=error.message,
    )
