"""Tests for mapping Graph API user JSON onto UserProfile."""

from typing import Any

import pytest

from credentials_facebook.profile import create_user_profile


@pytest.mark.unit
class TestCreateUserProfile:
    """Test create_user_profile."""

    def test_full_response(self, facebook_response: dict[str, Any]) -> None:
        """Test mapping of a response with name, email and picture."""
        profile = create_user_profile(facebook_response, "FacebookToken")

        assert profile is not None
        assert profile.id == "12345678901234567"
        assert profile.display_name == "John Doe"
        assert profile.provider == "FacebookToken"
        assert profile.name is not None
        assert profile.name.family_name == "Doe"
        assert profile.name.given_name == "John"
        assert profile.name.middle_name == ""
        assert profile.emails is not None
        assert [(e.value, e.type) for e in profile.emails] == [
            ("john_doe@invalid.com", "")
        ]
        assert profile.photos is not None
        assert profile.photos[0].value == facebook_response["picture"]["data"]["url"]

    def test_minimal_response(self) -> None:
        """Test that id and name alone produce a profile."""
        profile = create_user_profile({"id": "1", "name": "Jane"}, "Facebook")

        assert profile is not None
        assert profile.name is None
        assert profile.emails is None
        assert profile.photos is None
        assert profile.extended_properties == {}

    def test_middle_name(self) -> None:
        profile = create_user_profile(
            {
                "id": "1",
                "name": "Jane Q Public",
                "first_name": "Jane",
                "middle_name": "Q",
                "last_name": "Public",
            },
            "Facebook",
        )

        assert profile is not None
        assert profile.name is not None
        assert profile.name.middle_name == "Q"

    def test_name_requires_first_and_last(self) -> None:
        profile = create_user_profile(
            {"id": "1", "name": "Jane", "first_name": "Jane"}, "Facebook"
        )
        assert profile is not None
        assert profile.name is None

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "No Id"},
            {"id": "1"},
            {"id": 1, "name": "Numeric Id"},
            {},
        ],
    )
    def test_missing_id_or_name(self, data: dict[str, Any]) -> None:
        """Test that a response without string id and name gives no profile."""
        assert create_user_profile(data, "Facebook") is None

    def test_picture_without_url_is_ignored(self) -> None:
        profile = create_user_profile(
            {"id": "1", "name": "Jane", "picture": {"data": {"is_silhouette": True}}},
            "Facebook",
        )
        assert profile is not None
        assert profile.photos is None
