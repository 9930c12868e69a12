"""Pre-built ``TypeSafeFacebookToken`` carrying the documented user fields."""

from .base import TypeSafeFacebookToken
from .structures import (
    FacebookAgeRange,
    FacebookFriends,
    FacebookLikes,
    FacebookPage,
    FacebookPhotos,
    FacebookPicture,
    FacebookPosts,
    FacebookTaggedPlaces,
)


class FacebookTokenProfile(TypeSafeFacebookToken):
    """Default fields plus the optional and protected Facebook user fields.

    Optional and protected fields are only filled in when the token grants
    access to them; most protected fields require a Facebook app review.

    Set the app id before use, tokens issued for other apps are rejected:

        FacebookTokenProfile.app_id = "<your OAuth client id>"
    """

    app_id = ""

    # Public profile
    picture: FacebookPicture
    first_name: str
    last_name: str
    name_format: str
    short_name: str

    # Optional fields
    middle_name: str | None = None
    email: str | None = None

    # Protected fields
    age_range: FacebookAgeRange | None = None
    birthday: str | None = None  # MM/DD/YYYY
    friends: FacebookFriends | None = None
    gender: str | None = None
    hometown: FacebookPage | None = None
    likes: FacebookLikes | None = None
    link: str | None = None
    location: FacebookPage | None = None
    photos: FacebookPhotos | None = None
    posts: FacebookPosts | None = None
    tagged_places: FacebookTaggedPlaces | None = None
