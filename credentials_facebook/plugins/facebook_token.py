"""Authentication using a Facebook OAuth access token."""

from collections.abc import Mapping
from typing import Any

from starlette.requests import Request

from credentials_facebook.config.settings import Settings
from credentials_facebook.core.logging import get_logger, mask_token
from credentials_facebook.credentials.base import AuthResult, CredentialsPlugin
from credentials_facebook.credentials.cache import TokenCache
from credentials_facebook.credentials.models import UserProfile, UserProfileDelegate
from credentials_facebook.exceptions import GraphAPIError
from credentials_facebook.graph.client import GraphAPIClient
from credentials_facebook.options import get_fields, get_user_profile_delegate
from credentials_facebook.profile import create_user_profile


logger = get_logger(__name__)

TOKEN_TYPE_HEADER = "X-token-type"
ACCESS_TOKEN_HEADER = "access_token"


class CredentialsFacebookToken(CredentialsPlugin):
    """Authenticate requests carrying a Facebook OAuth token.

    Requests must declare ``X-token-type: FacebookToken`` and supply the token
    in the ``access_token`` header. Resolved profiles are cached per token;
    with ``token_time_to_live`` set, a cached profile older than that is
    discarded and the token is validated against Facebook again.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        token_time_to_live: float | None = None,
        graph_client: GraphAPIClient | None = None,
    ) -> None:
        """Initialize the plugin.

        Args:
            options: Plugin options (see ``CredentialsFacebookOptions``)
            token_time_to_live: Seconds a cached profile is trusted
            graph_client: Graph API client; a default one is created otherwise
        """
        self.options: dict[str, Any] = dict(options or {})
        self.token_time_to_live = token_time_to_live
        self.graph_client = graph_client or GraphAPIClient()
        self.users_cache: TokenCache[UserProfile] | None = None

    @classmethod
    def from_settings(
        cls, settings: Settings, options: Mapping[str, Any] | None = None
    ) -> "CredentialsFacebookToken":
        merged: dict[str, Any] = {}
        if settings.facebook.fields:
            merged["fields"] = settings.facebook.fields
        merged.update(options or {})
        return cls(
            options=merged,
            token_time_to_live=settings.cache.token_time_to_live,
            graph_client=GraphAPIClient.from_settings(settings),
        )

    @property
    def name(self) -> str:
        return "FacebookToken"

    @property
    def redirecting(self) -> bool:
        return False

    @property
    def user_profile_delegate(self) -> UserProfileDelegate | None:
        return get_user_profile_delegate(self.options)

    def _cache(self) -> TokenCache[UserProfile]:
        if self.users_cache is None:
            self.users_cache = TokenCache(ttl=self.token_time_to_live)
        return self.users_cache

    def _cached_profile(self, token: str) -> UserProfile | None:
        element = self._cache().get_element(token)
        if element is None:
            return None
        if element.is_expired(self.token_time_to_live):
            self._cache().delete(token)
            logger.debug("facebook_token_cache_expired", token=mask_token(token))
            return None
        return element.user_profile

    async def authenticate(
        self, request: Request, options: dict[str, Any] | None = None
    ) -> AuthResult[UserProfile]:
        """Authenticate a request using the Facebook OAuth token it carries."""
        if request.headers.get(TOKEN_TYPE_HEADER) != self.name:
            return AuthResult.passed()

        token = request.headers.get(ACCESS_TOKEN_HEADER)
        if not token:
            logger.info("facebook_token_missing", category="auth")
            return AuthResult.failure()

        cached = self._cached_profile(token)
        if cached is not None:
            logger.debug("facebook_token_cache_hit", token=mask_token(token))
            return AuthResult.success(cached)

        fields = get_fields(options) or get_fields(self.options)
        try:
            data = await self.graph_client.get_profile(token, fields)
        except GraphAPIError as e:
            logger.warning(
                "facebook_token_validation_failed",
                token=mask_token(token),
                error=e.message,
                upstream_status=e.upstream_status,
                category="auth",
            )
            return AuthResult.failure()

        user_profile = create_user_profile(data, self.name)
        if user_profile is None:
            logger.error(
                "facebook_profile_incomplete",
                response_keys=list(data.keys()),
                category="auth",
            )
            return AuthResult.failure()

        delegate = get_user_profile_delegate(options) or self.user_profile_delegate
        if delegate is not None:
            delegate.update(user_profile, data)

        self._cache().set(token, user_profile)
        logger.info(
            "facebook_token_authenticated",
            user_id=user_profile.id,
            token=mask_token(token),
            category="auth",
        )
        return AuthResult.success(user_profile)
