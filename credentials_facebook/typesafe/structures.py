"""Graph API structures used by ``FacebookTokenProfile``.

See https://developers.facebook.com/docs/graph-api/reference/user/
"""

from pydantic import BaseModel, ConfigDict


class GraphModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class CursorBasedPagination(GraphModel):
    """Cursor paging of a Graph API edge."""

    class Cursors(GraphModel):
        before: str
        after: str

    cursors: Cursors
    # Endpoint returning the next page; absent on the last page
    next: str | None = None


class OffsetBasedPagination(GraphModel):
    """Offset paging of a Graph API edge."""

    previous: str | None = None
    next: str | None = None


class FacebookPicture(GraphModel):
    """Metadata of the subject's profile picture."""

    class Properties(GraphModel):
        url: str
        height: int
        width: int

    data: Properties


class FacebookAgeRange(GraphModel):
    """Bounds of the subject's age; either bound may be missing."""

    min: int | None = None
    max: int | None = None


class FacebookFriends(GraphModel):
    """Friends of the subject that also granted the permission to this app."""

    class FriendSummary(GraphModel):
        total_count: int

    data: list[str]
    summary: FriendSummary


class FacebookPage(GraphModel):
    """A Facebook Page, e.g. the subject's hometown or location."""

    id: str
    name: str


class FacebookLikes(GraphModel):
    """Pages the subject has liked."""

    class FacebookLike(GraphModel):
        name: str
        id: str
        created_time: str | None = None

    data: list[FacebookLike]
    paging: CursorBasedPagination | None = None


class FacebookPhotos(GraphModel):
    """Metadata of the subject's photos."""

    class FacebookPhoto(GraphModel):
        created_time: str
        id: str
        name: str | None = None

    data: list[FacebookPhoto]
    paging: CursorBasedPagination | None = None


class FacebookPosts(GraphModel):
    """Posts on the subject's timeline."""

    class FacebookPost(GraphModel):
        message: str | None = None
        created_time: str | None = None
        id: str | None = None

    data: list[FacebookPost]
    paging: OffsetBasedPagination | None = None


class FacebookLocation(GraphModel):
    """Location of a Place."""

    city: str | None = None
    country: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    state: str | None = None
    street: str | None = None
    zip: str | None = None


class FacebookPlace(GraphModel):
    """A Page representing a place with a location."""

    id: str
    name: str | None = None
    location: FacebookLocation | None = None


class FacebookTaggedPlace(GraphModel):
    id: str
    created_time: str | None = None
    place: FacebookPlace | None = None


class FacebookTaggedPlaces(GraphModel):
    """Places the subject has been tagged at."""

    data: list[FacebookTaggedPlace]
    paging: CursorBasedPagination
