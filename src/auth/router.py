"""Session and profile endpoints.

Provides routes for:
- Mocked sign-in (no password)
- Viewing and editing the current profile
"""

import structlog
from fastapi import APIRouter

from src.storage.repository import StorageError

from .dependencies import CurrentViewer, ProfileServiceDep, handle_profile_error
from .schemas import ProfileResponse, SignInRequest, UpdateProfileRequest
from .service import ProfileError


logger = structlog.get_logger(__name__)


router = APIRouter(prefix="/v1", tags=["auth"])


@router.post(
    "/auth/sign-in",
    response_model=ProfileResponse,
    summary="Sign in",
)
def sign_in(
    data: SignInRequest,
    service: ProfileServiceDep,
) -> ProfileResponse:
    """Return the profile for the e-mail, creating it on first sign-in."""
    try:
        profile = service.sign_in(data.name, data.email, data.conditions)
    except StorageError as e:
        logger.error("profile_sign_in_failed", error=e.message)
        raise handle_profile_error(ProfileError(e.message, e.code)) from e
    return ProfileResponse.from_profile(profile)


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Get current profile",
)
def get_profile(
    viewer: CurrentViewer,
    service: ProfileServiceDep,
) -> ProfileResponse:
    """Get the signed-in viewer's profile."""
    try:
        profile = service.require_profile(viewer.id)
    except ProfileError as e:
        raise handle_profile_error(e) from e
    except StorageError as e:
        logger.error("profile_load_failed", error=e.message)
        raise handle_profile_error(ProfileError(e.message, e.code)) from e
    return ProfileResponse.from_profile(profile)


@router.patch(
    "/profile",
    response_model=ProfileResponse,
    summary="Update current profile",
)
def update_profile(
    data: UpdateProfileRequest,
    viewer: CurrentViewer,
    service: ProfileServiceDep,
) -> ProfileResponse:
    """Update name, bio or conditions of the signed-in viewer."""
    try:
        profile = service.update_profile(
            viewer.id,
            name=data.name,
            bio=data.bio,
            conditions=data.conditions,
        )
    except ProfileError as e:
        raise handle_profile_error(e) from e
    except StorageError as e:
        logger.error("profile_update_failed", error=e.message)
        raise handle_profile_error(ProfileError(e.message, e.code)) from e
    return ProfileResponse.from_profile(profile)
