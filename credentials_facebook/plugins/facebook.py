"""Authentication using Facebook web login with OAuth.

See https://developers.facebook.com/docs/facebook-login/manually-build-a-login-flow
"""

import urllib.parse
from collections.abc import Mapping
from typing import Any

from starlette.requests import Request

from credentials_facebook.config.settings import Settings
from credentials_facebook.core.logging import get_logger
from credentials_facebook.credentials.base import AuthResult, CredentialsPlugin
from credentials_facebook.credentials.models import UserProfile, UserProfileDelegate
from credentials_facebook.exceptions import ConfigurationError, GraphAPIError
from credentials_facebook.graph.client import GraphAPIClient
from credentials_facebook.options import (
    get_fields,
    get_scope,
    get_user_profile_delegate,
)
from credentials_facebook.profile import create_user_profile


logger = get_logger(__name__)

DEFAULT_DIALOG_URL = "https://www.facebook.com/dialog/oauth"


class CredentialsFacebook(CredentialsPlugin):
    """Redirecting plugin implementing the Facebook login dialog flow.

    A request without a ``code`` query parameter is answered with a redirect
    to the Facebook login dialog. The callback request carrying ``code`` is
    exchanged for an access token, which is then used to read the profile.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        callback_url: str,
        options: Mapping[str, Any] | None = None,
        graph_client: GraphAPIClient | None = None,
        dialog_url: str = DEFAULT_DIALOG_URL,
    ) -> None:
        """Initialize the plugin.

        Args:
            client_id: App ID of the app in the Facebook Developer dashboard
            client_secret: App Secret of the app in the Facebook Developer dashboard
            callback_url: URL Facebook redirects back to
            options: Plugin options (see ``CredentialsFacebookOptions``)
            graph_client: Graph API client; a default one is created otherwise
            dialog_url: Facebook login dialog URL
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.callback_url = callback_url
        self.scope = get_scope(options)
        self.fields = get_fields(options)
        self._delegate = get_user_profile_delegate(options)
        self.graph_client = graph_client or GraphAPIClient()
        self.dialog_url = dialog_url

    @classmethod
    def from_settings(
        cls, settings: Settings, options: Mapping[str, Any] | None = None
    ) -> "CredentialsFacebook":
        """Build the plugin from the ``facebook`` settings section.

        Raises:
            ConfigurationError: If the app id, secret or callback URL is missing
        """
        fb = settings.facebook
        if not fb.client_id or fb.client_secret is None or not fb.callback_url:
            raise ConfigurationError(
                "facebook.client_id, facebook.client_secret and "
                "facebook.callback_url are required for web login"
            )
        merged: dict[str, Any] = {}
        if fb.scope:
            merged["scope"] = fb.scope
        if fb.fields:
            merged["fields"] = fb.fields
        merged.update(options or {})
        return cls(
            client_id=fb.client_id,
            client_secret=fb.client_secret.get_secret_value(),
            callback_url=fb.callback_url,
            options=merged,
            graph_client=GraphAPIClient.from_settings(settings),
            dialog_url=fb.dialog_url,
        )

    @property
    def name(self) -> str:
        return "Facebook"

    @property
    def redirecting(self) -> bool:
        return True

    @property
    def user_profile_delegate(self) -> UserProfileDelegate | None:
        return self._delegate

    def login_url(self) -> str:
        """URL of the Facebook login dialog for this app."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.callback_url,
            "response_type": "code",
        }
        if self.scope:
            params["scope"] = self.scope
        return f"{self.dialog_url}?{urllib.parse.urlencode(params)}"

    async def authenticate(
        self, request: Request, options: dict[str, Any] | None = None
    ) -> AuthResult[UserProfile]:
        """Redirect to the login dialog, or complete login from the callback."""
        code = request.query_params.get("code")
        if not code:
            logger.debug("facebook_login_redirect", category="auth")
            return AuthResult.in_progress(self.login_url())

        try:
            token = await self.graph_client.exchange_code(
                code,
                client_id=self.client_id,
                client_secret=self.client_secret,
                redirect_uri=self.callback_url,
            )
            data = await self.graph_client.get_profile(token, self.fields)
        except GraphAPIError as e:
            logger.warning(
                "facebook_login_failed",
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

        if self._delegate is not None:
            self._delegate.update(user_profile, data)

        logger.info("facebook_login_success", user_id=user_profile.id, category="auth")
        return AuthResult.success(user_profile)
