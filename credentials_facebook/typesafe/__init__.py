"""Type-safe Facebook token profiles."""

from .base import DEFAULT_VALID_FIELD_NAMES, TypeSafeFacebook, TypeSafeFacebookToken
from .dependencies import facebook_profile, optional_facebook_profile
from .profile import FacebookTokenProfile
from .structures import (
    CursorBasedPagination,
    FacebookAgeRange,
    FacebookFriends,
    FacebookLikes,
    FacebookLocation,
    FacebookPage,
    FacebookPhotos,
    FacebookPicture,
    FacebookPlace,
    FacebookPosts,
    FacebookTaggedPlace,
    FacebookTaggedPlaces,
    OffsetBasedPagination,
)


__all__ = [
    "DEFAULT_VALID_FIELD_NAMES",
    "CursorBasedPagination",
    "FacebookAgeRange",
    "FacebookFriends",
    "FacebookLikes",
    "FacebookLocation",
    "FacebookPage",
    "FacebookPhotos",
    "FacebookPicture",
    "FacebookPlace",
    "FacebookPosts",
    "FacebookTaggedPlace",
    "FacebookTaggedPlaces",
    "FacebookTokenProfile",
    "OffsetBasedPagination",
    "TypeSafeFacebook",
    "TypeSafeFacebookToken",
    "facebook_profile",
    "optional_facebook_profile",
]
