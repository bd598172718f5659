"""Health check endpoints."""

from fastapi import APIRouter, HTTPException, Request, status

from src.config import Settings
from src.storage.repository import StorageError


router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live")
def liveness() -> dict[str, str]:
    """Liveness probe - checks if the application is running."""
    return {"status": "alive"}


@router.get("/ready")
def readiness(request: Request) -> dict[str, str | bool | int]:
    """Readiness probe - checks that the post collection can be read."""
    settings: Settings = request.app.state.settings
    store = request.app.state.post_store
    try:
        post_count = len(store.posts)
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=e.message,
        ) from e
    return {
        "status": "ready",
        "environment": settings.environment,
        "storage_backend": settings.storage_backend,
        "post_count": post_count,
    }


@router.get("")
def health(request: Request) -> dict[str, str]:
    """General health check endpoint."""
    settings: Settings = request.app.state.settings
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }
