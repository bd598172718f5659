"""Profile service layer.

Business logic for:
- Mocked sign-in (find or create a profile by e-mail)
- Viewing and editing the current profile (name, bio, conditions)
- Keeping the stored membership list in step with join/leave
"""

import threading
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import TYPE_CHECKING

import structlog

from src.communities.models import Condition

from .models import Profile, make_profile, normalize_conditions


if TYPE_CHECKING:
    from src.storage.repository import ProfileRepository


logger = structlog.get_logger(__name__)

ProfileCollection = tuple[Profile, ...]


# ==============================================================================
# Custom Exceptions
# ==============================================================================


class ProfileError(Exception):
    """Base profile error."""

    def __init__(self, message: str, code: str = "profile_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class ProfileNotFoundError(ProfileError):
    """Profile not found."""

    def __init__(self, message: str = "Perfil nao encontrado"):
        super().__init__(message, "profile_not_found")


class InvalidProfileError(ProfileError):
    """Profile data rejected."""

    def __init__(self, message: str = "Dados do perfil invalidos"):
        super().__init__(message, "invalid_profile")


# ==============================================================================
# Profile Service
# ==============================================================================


class ProfileService:
    """Service owning the profile collection."""

    def __init__(self, repository: "ProfileRepository") -> None:
        self.repository = repository
        self._profiles: ProfileCollection | None = None
        self._lock = threading.RLock()

    @property
    def profiles(self) -> ProfileCollection:
        """Current collection, loaded on first access."""
        with self._lock:
            if self._profiles is None:
                self._profiles = tuple(self.repository.load())
            return self._profiles

    def get_profile(self, profile_id: str) -> Profile | None:
        """Return the profile with ``profile_id`` or None."""
        return next((p for p in self.profiles if p.id == profile_id), None)

    def require_profile(self, profile_id: str) -> Profile:
        """Return the profile with ``profile_id``.

        Raises:
            ProfileNotFoundError: If no such profile exists
        """
        profile = self.get_profile(profile_id)
        if profile is None:
            raise ProfileNotFoundError
        return profile

    def _update(
        self,
        profile_id: str,
        fn: Callable[[Profile], Profile],
    ) -> Profile:
        """Replace one profile with ``fn(profile)`` and persist the collection."""
        with self._lock:
            current = self.require_profile(profile_id)
            updated = fn(current)
            if updated == current:
                return current
            profiles = tuple(
                updated if p.id == profile_id else p for p in self.profiles
            )
            self.repository.save(profiles)
            self._profiles = profiles
            return updated

    def sign_in(
        self,
        name: str,
        email: str,
        conditions: Sequence[Condition] = (),
    ) -> Profile:
        """Mocked sign-in: return the profile for ``email``, creating it if new.

        No password is checked; the e-mail alone identifies the profile.
        """
        email = email.strip()
        with self._lock:
            if email:
                key = email.lower()
                for profile in self.profiles:
                    if profile.email.lower() == key:
                        logger.info("profile_signed_in", profile_id=profile.id)
                        return profile

            profile = make_profile(name, email, tuple(conditions))
            profiles = (*self.profiles, profile)
            self.repository.save(profiles)
            self._profiles = profiles

        logger.info(
            "profile_created",
            profile_id=profile.id,
            conditions=[c.value for c in profile.conditions],
        )
        return profile

    def update_profile(
        self,
        profile_id: str,
        name: str | None = None,
        bio: str | None = None,
        conditions: Sequence[Condition] | None = None,
    ) -> Profile:
        """Update profile fields; ``None`` leaves a field as it is.

        Raises:
            ProfileNotFoundError: If the profile does not exist
            InvalidProfileError: If the new name is blank
        """
        if name is not None:
            name = name.strip()
            if not name:
                raise InvalidProfileError("O nome nao pode ser vazio")

        def apply(profile: Profile) -> Profile:
            return replace(
                profile,
                name=profile.name if name is None else name,
                bio=profile.bio if bio is None else bio.strip(),
                conditions=profile.conditions
                if conditions is None
                else normalize_conditions(conditions),
            )

        profile = self._update(profile_id, apply)
        logger.info("profile_updated", profile_id=profile_id)
        return profile

    def record_membership(self, profile_id: str, joined: Sequence[str]) -> None:
        """Store the viewer's membership list if the viewer has a profile."""
        if self.get_profile(profile_id) is None:
            return
        self._update(
            profile_id, lambda p: replace(p, joined_communities=tuple(joined))
        )
