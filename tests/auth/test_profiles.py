"""Tests for profiles and the mocked sign-in."""

from unittest.mock import MagicMock

import pytest

from src.auth.models import (
    DEFAULT_BIO,
    DEFAULT_NAME,
    Profile,
    make_profile,
    normalize_conditions,
)
from src.auth.service import (
    InvalidProfileError,
    ProfileNotFoundError,
    ProfileService,
)
from src.communities.models import Condition
from src.storage.repository import InMemoryRepository, PersistenceError


LUCIA = {"X-Viewer-ID": "u4"}


@pytest.fixture
def service(profile_repository) -> ProfileService:
    return ProfileService(profile_repository)


# ==============================================================================
# Model
# ==============================================================================


class TestMakeProfile:
    """Tests for make_profile."""

    def test_defaults(self) -> None:
        profile = make_profile("  ", " rafa@vivamente.app ")

        assert profile.name == DEFAULT_NAME
        assert profile.email == "rafa@vivamente.app"
        assert profile.bio == DEFAULT_BIO
        assert profile.conditions == (Condition.OTHER,)
        assert profile.avatar == "https://picsum.photos/seed/rafa@vivamente.app/200"
        assert profile.joined_communities == ("general",)
        assert len(profile.id) == 9

    def test_keeps_given_conditions(self) -> None:
        profile = make_profile(
            "Rafa", "rafa@x.com", (Condition.ADHD, Condition.ADHD, Condition.ASD)
        )

        assert profile.conditions == (Condition.ADHD, Condition.ASD)

    def test_to_viewer(self, profiles) -> None:
        viewer = profiles[0].to_viewer()

        assert viewer.id == "u4"
        assert viewer.name == "Lucia"
        assert viewer.joined_communities == ("general", "g2")


class TestProfileFromDict:
    """Tests for Profile.from_dict / to_dict."""

    def test_stored_shape(self, profiles) -> None:
        data = profiles[0].to_dict()

        assert data["joinedCommunities"] == ["general", "g2"]
        assert data["conditions"] == ["Ansiedade"]
        assert Profile.from_dict(data) == profiles[0]

    def test_missing_fields(self) -> None:
        profile = Profile.from_dict({"id": "u8", "conditions": ["TEA", "Outra coisa"]})

        assert profile.name == DEFAULT_NAME
        assert profile.conditions == (Condition.ASD,)
        assert profile.joined_communities == ("general",)

    def test_normalize_conditions(self) -> None:
        assert normalize_conditions(["TDAH", "x", "TDAH", None]) == (Condition.ADHD,)


# ==============================================================================
# Service
# ==============================================================================


class TestProfileService:
    """Tests for ProfileService."""

    def test_sign_in_creates_profile(self, service, profile_repository) -> None:
        profile = service.sign_in("Rafa", "rafa@vivamente.app", [Condition.ADHD])

        assert profile.name == "Rafa"
        assert profile.conditions == (Condition.ADHD,)
        assert service.get_profile(profile.id) == profile
        assert profile_repository.items[-1] == profile
        assert profile_repository.save_count == 1

    def test_sign_in_finds_existing_by_email(self, service, profile_repository) -> None:
        """The e-mail identifies the profile, regardless of case and name."""
        profile = service.sign_in("Outro nome", "  LUCIA@vivamente.app ")

        assert profile.id == "u4"
        assert profile.name == "Lucia"
        assert profile_repository.save_count == 0

    def test_update_profile(self, service, profile_repository) -> None:
        profile = service.update_profile(
            "u4",
            name="  Lucia M.  ",
            bio="Nova bio",
            conditions=[Condition.DEPRESSION, Condition.ANXIETY],
        )

        assert profile.name == "Lucia M."
        assert profile.bio == "Nova bio"
        assert profile.conditions == (Condition.DEPRESSION, Condition.ANXIETY)
        assert profile.email == "lucia@vivamente.app"
        assert profile_repository.items[0] == profile

    def test_partial_update_keeps_other_fields(self, service, profiles) -> None:
        profile = service.update_profile("u4", bio="Só a bio")

        assert profile.name == profiles[0].name
        assert profile.conditions == profiles[0].conditions

    def test_unchanged_update_is_not_saved(self, service, profile_repository) -> None:
        service.update_profile("u4", name="Lucia")

        assert profile_repository.save_count == 0

    def test_blank_name_is_rejected(self, service) -> None:
        with pytest.raises(InvalidProfileError) as exc_info:
            service.update_profile("u4", name="   ")

        assert exc_info.value.code == "invalid_profile"

    def test_unknown_profile(self, service) -> None:
        with pytest.raises(ProfileNotFoundError):
            service.update_profile("nope", bio="x")

    def test_record_membership(self, service, profile_repository) -> None:
        service.record_membership("u4", ("general", "g2", "g1"))

        assert service.get_profile("u4").joined_communities == ("general", "g2", "g1")
        assert profile_repository.save_count == 1

    def test_record_membership_without_profile(self, service, profile_repository) -> None:
        service.record_membership("u1", ("general",))

        assert profile_repository.save_count == 0

    def test_failed_save_keeps_memory(self, profiles) -> None:
        repository = MagicMock()
        repository.load.return_value = list(profiles)
        repository.save.side_effect = PersistenceError()
        service = ProfileService(repository)

        with pytest.raises(PersistenceError):
            service.update_profile("u4", bio="x")

        assert service.get_profile("u4") == profiles[0]

    def test_empty_repository(self) -> None:
        assert ProfileService(InMemoryRepository()).profiles == ()


# ==============================================================================
# Routes
# ==============================================================================


class TestSignInRoute:
    """Tests for POST /v1/auth/sign-in."""

    def test_new_user(self, client) -> None:
        response = client.post(
            "/v1/auth/sign-in", json={"name": "Rafa", "email": "rafa@vivamente.app"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Rafa"
        assert data["bio"] == "Bem-vindo ao meu perfil!"
        assert data["conditions"] == ["Outro"]
        assert data["joined_communities"] == ["general"]
        assert data["avatar"] == "https://picsum.photos/seed/rafa@vivamente.app/200"

    def test_returning_user(self, client) -> None:
        response = client.post(
            "/v1/auth/sign-in", json={"email": "lucia@vivamente.app"}
        )

        assert response.json()["id"] == "u4"

    def test_invalid_email(self, client) -> None:
        response = client.post("/v1/auth/sign-in", json={"email": "sem-arroba"})

        assert response.status_code == 422

    def test_signed_in_id_opens_profile(self, client) -> None:
        profile = client.post(
            "/v1/auth/sign-in",
            json={"name": "Rafa", "email": "rafa@vivamente.app", "conditions": ["TEA"]},
        ).json()

        response = client.get("/v1/profile", headers={"X-Viewer-ID": profile["id"]})

        assert response.status_code == 200
        assert response.json()["conditions"] == ["TEA"]


class TestProfileRoutes:
    """Tests for GET/PATCH /v1/profile."""

    def test_get(self, client) -> None:
        response = client.get("/v1/profile", headers=LUCIA)

        assert response.status_code == 200
        assert response.json()["email"] == "lucia@vivamente.app"

    def test_get_without_profile(self, client) -> None:
        response = client.get("/v1/profile", headers={"X-Viewer-ID": "u1"})

        assert response.status_code == 404
        assert response.json()["message"] == "Perfil nao encontrado"

    def test_get_anonymous(self, client) -> None:
        assert client.get("/v1/profile").status_code == 401

    def test_update(self, client) -> None:
        response = client.patch(
            "/v1/profile",
            json={"name": "Lu", "bio": "Respirando", "conditions": ["TDAH"]},
            headers=LUCIA,
        )

        assert response.status_code == 200
        data = response.json()
        assert (data["name"], data["bio"], data["conditions"]) == (
            "Lu",
            "Respirando",
            ["TDAH"],
        )
        assert client.get("/v1/profile", headers=LUCIA).json()["name"] == "Lu"

    def test_update_blank_name(self, client) -> None:
        response = client.patch("/v1/profile", json={"name": "  "}, headers=LUCIA)

        assert response.status_code == 422


class TestViewerFromProfile:
    """A stored profile fills in what the headers leave out."""

    def test_feed_uses_profile_memberships(self, client) -> None:
        feed = client.get("/v1/feed", headers=LUCIA).json()

        assert [item["id"] for item in feed["items"]] == ["p2", "p3"]

    def test_header_overrides_profile(self, client) -> None:
        feed = client.get(
            "/v1/feed", headers={**LUCIA, "X-Viewer-Communities": "general"}
        ).json()

        assert [item["id"] for item in feed["items"]] == ["p2"]

    def test_post_uses_profile_name(self, client) -> None:
        response = client.post(
            "/v1/posts", json={"community_id": "g2", "content": "Oi"}, headers=LUCIA
        )

        assert response.json()["author"] == {"id": "u4", "name": "Lucia"}

    def test_membership_is_stored_in_profile(self, client) -> None:
        client.post("/v1/communities/g1/membership", headers=LUCIA)

        profile = client.get("/v1/profile", headers=LUCIA).json()
        assert profile["joined_communities"] == ["general", "g2", "g1"]
        feed = client.get("/v1/feed", headers=LUCIA).json()
        assert [item["id"] for item in feed["items"]] == ["p2", "p1", "p3"]
