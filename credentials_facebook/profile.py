"""Mapping of Graph API user JSON onto ``UserProfile``."""

from typing import Any

from credentials_facebook.credentials.models import (
    UserProfile,
    UserProfileEmail,
    UserProfileName,
    UserProfilePhoto,
)


def create_user_profile(facebook_data: dict[str, Any], provider: str) -> UserProfile | None:
    """Build a user profile from a ``/me`` response.

    ``id`` and ``name`` are required; without them no profile is returned.
    The structured name is only set when both first and last name are present.

    Args:
        facebook_data: Decoded JSON object returned by the Graph API
        provider: Name of the plugin that authenticated the user

    Returns:
        The profile, or None if the response lacks ``id`` or ``name``
    """
    user_id = facebook_data.get("id")
    display_name = facebook_data.get("name")
    if not isinstance(user_id, str) or not isinstance(display_name, str):
        return None

    emails = None
    email = facebook_data.get("email")
    if isinstance(email, str):
        emails = [UserProfileEmail(value=email, type="")]

    name = None
    family_name = facebook_data.get("last_name")
    given_name = facebook_data.get("first_name")
    if isinstance(family_name, str) and isinstance(given_name, str):
        middle_name = facebook_data.get("middle_name")
        name = UserProfileName(
            family_name=family_name,
            given_name=given_name,
            middle_name=middle_name if isinstance(middle_name, str) else "",
        )

    photos = None
    picture = facebook_data.get("picture")
    if isinstance(picture, dict):
        data = picture.get("data")
        if isinstance(data, dict) and isinstance(data.get("url"), str):
            photos = [UserProfilePhoto(value=data["url"])]

    return UserProfile(
        id=user_id,
        display_name=display_name,
        provider=provider,
        name=name,
        emails=emails,
        photos=photos,
    )
