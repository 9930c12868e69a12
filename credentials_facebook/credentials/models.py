"""User profile models shared by all credential plugins."""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field


class UserProfileName(BaseModel):
    """Structured name of an authenticated user."""

    family_name: str
    given_name: str
    middle_name: str = ""


class UserProfileEmail(BaseModel):
    """An e-mail address of an authenticated user."""

    value: str
    type: str = ""


class UserProfilePhoto(BaseModel):
    """A photo URL of an authenticated user."""

    value: str


class UserProfile(BaseModel):
    """Provider-neutral profile of an authenticated user."""

    id: str
    display_name: str
    provider: str
    name: UserProfileName | None = None
    emails: list[UserProfileEmail] | None = None
    photos: list[UserProfilePhoto] | None = None
    extended_properties: dict[str, Any] = Field(default_factory=dict)


@runtime_checkable
class UserProfileDelegate(Protocol):
    """Hook for copying extra provider data into a user profile."""

    def update(self, user_profile: UserProfile, from_data: dict[str, Any]) -> None:
        """Update ``user_profile`` in place from the raw provider response.

        Args:
            user_profile: Profile built from the standard fields
            from_data: Decoded JSON returned by the provider
        """
        ...
