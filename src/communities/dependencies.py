"""FastAPI dependencies for community routes."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from .service import CommunityError, CommunityService


def get_community_service(request: Request) -> CommunityService:
    """Get community service from app state."""
    service = getattr(request.app.state, "community_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Servico de grupos nao disponivel",
        )
    return service


CommunityServiceDep = Annotated[CommunityService, Depends(get_community_service)]


def handle_community_error(error: CommunityError) -> HTTPException:
    """Convert community errors to HTTP exceptions."""
    status_map = {
        "community_not_found": status.HTTP_404_NOT_FOUND,
        "invalid_community": status.HTTP_400_BAD_REQUEST,
        "persistence_failed": status.HTTP_503_SERVICE_UNAVAILABLE,
        "corrupt_data": status.HTTP_503_SERVICE_UNAVAILABLE,
    }
    return HTTPException(
        status_code=status_map.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=error.message,
    )
