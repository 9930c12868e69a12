"""Type-safe Facebook token authentication.

Applications declare a pydantic model listing the Facebook user fields they
need and authenticate requests straight into an instance of that model:

    class ExampleProfile(TypeSafeFacebookToken):
        app_id = "yourAppID"        # Facebook App the tokens must belong to
        email: str | None = None    # Optional field: the user may not grant it

    @app.get("/facebookProfile")
    async def profile(user: Annotated[ExampleProfile, Depends(facebook_profile(ExampleProfile))]):
        return user

The Graph API query only asks for declared fields Facebook knows about, since
Facebook answers Bad Request for anything other than documented field names.
"""

from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, ValidationError
from starlette.requests import Request

from credentials_facebook.config.settings import get_settings
from credentials_facebook.core.logging import get_logger, mask_token
from credentials_facebook.credentials.base import AuthResult
from credentials_facebook.credentials.cache import TokenCache, cache_for_type
from credentials_facebook.exceptions import GraphAPIError
from credentials_facebook.graph.client import GraphAPIClient
from credentials_facebook.plugins.facebook_token import (
    ACCESS_TOKEN_HEADER,
    TOKEN_TYPE_HEADER,
)


logger = get_logger(__name__)

TOKEN_TYPE = "FacebookToken"

# Source: https://developers.facebook.com/docs/facebook-login/permissions/v3.0#reference-default_fields
# Not exhaustive; override ``valid_field_names`` to extend it.
DEFAULT_VALID_FIELD_NAMES: frozenset[str] = frozenset(
    {
        # Public profile, always available
        "id",
        "first_name",
        "last_name",
        "name",
        "name_format",
        "picture",
        "short_name",
        # Optional, the user may not have provided it
        "middle_name",
        # No app review needed, but the user may decline to share it
        "email",
        # Require app review
        "age_range",
        "birthday",
        "friends",
        "gender",
        "hometown",
        "likes",
        "link",
        "location",
        "photos",
        "posts",
        "tagged_places",
    }
)

_default_graph_client: GraphAPIClient | None = None


def _get_default_graph_client() -> GraphAPIClient:
    """Shared client built from the ``facebook`` and ``http`` settings."""
    global _default_graph_client
    if _default_graph_client is None:
        _default_graph_client = GraphAPIClient.from_settings(get_settings())
    return _default_graph_client


class TypeSafeFacebook(BaseModel):
    """Attributes common to the type-safe Facebook authentication methods.

    Not meant to be subclassed directly; use ``TypeSafeFacebookToken``.
    """

    model_config = ConfigDict(extra="ignore")

    #: OAuth client id ('AppID') tokens must have been issued for. When None
    #: the app is not verified and every valid token is accepted.
    app_id: ClassVar[str | None] = None

    #: Field names that may be requested from Facebook.
    valid_field_names: ClassVar[frozenset[str]] = DEFAULT_VALID_FIELD_NAMES

    #: Graph API client. When None, a shared client built from
    #: ``get_settings()`` (Graph URL, API version, HTTP timeouts) is used.
    graph_client: ClassVar[GraphAPIClient | None] = None

    @property
    def provider(self) -> str:
        return "Facebook"

    @classmethod
    def get_graph_client(cls) -> GraphAPIClient:
        return cls.graph_client or _get_default_graph_client()

    @classmethod
    def decode_valid_fields(cls) -> str:
        """Comma-separated Facebook fields declared on this model.

        Field names keep their declaration order; names outside
        ``valid_field_names`` are dropped.
        """
        declared = [field.alias or name for name, field in cls.model_fields.items()]
        return ",".join(name for name in declared if name in cls.valid_field_names)

    @classmethod
    async def validate_app_id(cls, token: str) -> bool:
        """Check that ``token`` was issued for ``app_id``.

        Returns True when no ``app_id`` is configured.
        """
        if cls.app_id is None:
            return True
        try:
            app = await cls.get_graph_client().get_app(token)
        except GraphAPIError as e:
            logger.warning(
                "facebook_app_lookup_failed",
                token=mask_token(token),
                error=e.message,
                category="auth",
            )
            return False
        return app.get("id") == cls.app_id

    @classmethod
    def decode_facebook_response(cls, data: bytes | str) -> Self | None:
        """Decode a ``/me`` response body into an instance of this model."""
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            logger.error(
                "facebook_profile_decode_failed",
                profile_type=cls.__name__,
                errors=e.errors(include_url=False),
                category="auth",
            )
            return None

    @classmethod
    async def get_facebook_profile(cls, token: str) -> Self | None:
        """Read the subject's profile for ``token`` into an instance of this model.

        Fails (returns None) when Facebook rejects the request, for example
        because an overridden ``valid_field_names`` lets an unknown field
        through, or when the response does not fit the model, such as a
        required field the subject declined to share.
        """
        fields = cls.decode_valid_fields()
        try:
            body = await cls.get_graph_client().get_profile_raw(token, fields or None)
        except GraphAPIError as e:
            logger.error(
                "facebook_profile_request_failed",
                upstream_status=e.upstream_status,
                error=e.message,
                category="auth",
            )
            return None
        profile = cls.decode_facebook_response(body)
        if profile is None:
            logger.debug("facebook_profile_response", body=body.decode(errors="replace"))
        return profile


class TypeSafeFacebookToken(TypeSafeFacebook):
    """A user authenticated with a Facebook OAuth token.

    Requests are handled when they carry ``X-token-type: FacebookToken`` and
    the token in the ``access_token`` header.
    """

    #: Application-scoped user id.
    id: str
    #: The subject's display name.
    name: str

    #: Maximum number of profiles in this type's token cache (0 = unlimited).
    cache_size: ClassVar[int] = 0

    #: Seconds a cached profile is trusted before the token is checked again.
    token_time_to_live: ClassVar[float | None] = None

    @classmethod
    def users_cache(cls) -> TokenCache[Any]:
        return cache_for_type(cls)

    @classmethod
    def get_from_cache(cls, token: str) -> Self | None:
        cached = cls.users_cache().get(token)
        return cached if isinstance(cached, cls) else None

    @classmethod
    def save_in_cache(cls, profile: Self, token: str) -> None:
        cls.users_cache().set(token, profile)

    @classmethod
    async def authenticate(cls, request: Request) -> AuthResult[Self]:
        """Authenticate ``request`` into an instance of this model."""
        if request.headers.get(TOKEN_TYPE_HEADER) != TOKEN_TYPE:
            return AuthResult.passed()

        token = request.headers.get(ACCESS_TOKEN_HEADER)
        if not token:
            return AuthResult.failure()

        cached = cls.get_from_cache(token)
        if cached is not None:
            return AuthResult.success(cached)

        # The user id is app-scoped, so tokens from other apps are rejected
        if not await cls.validate_app_id(token):
            logger.error(
                "facebook_app_id_mismatch",
                profile_type=cls.__name__,
                token=mask_token(token),
                category="auth",
            )
            return AuthResult.failure()

        profile = await cls.get_facebook_profile(token)
        if profile is None:
            logger.error(
                "facebook_profile_unavailable",
                profile_type=cls.__name__,
                token=mask_token(token),
                category="auth",
            )
            return AuthResult.failure()

        cls.save_in_cache(profile, token)
        return AuthResult.success(profile)
