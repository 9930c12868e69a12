"""Plugin chain that authenticates requests with registered credential plugins."""

from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.responses import RedirectResponse

from credentials_facebook.config.settings import Settings
from credentials_facebook.core.logging import get_logger
from credentials_facebook.exceptions import AuthenticationError

from .base import AuthStatus, CredentialsPlugin
from .cache import TokenCache
from .models import UserProfile


logger = get_logger(__name__)

USER_PROFILE_STATE_KEY = "user_profile"


class Credentials:
    """Registry of credential plugins and the request-level authentication flow.

    Non-redirecting plugins are tried in registration order on every request
    passed to ``authenticate``. Redirecting plugins are driven explicitly
    through ``login`` from the login and callback routes.
    """

    def __init__(
        self,
        options: dict[str, Any] | None = None,
        cache_size: int = 0,
        token_time_to_live: float | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            options: Per-request options handed to every plugin
            cache_size: Size of caches assigned to plugins without one
            token_time_to_live: TTL of caches assigned to plugins without one
        """
        self.options = options or {}
        self.cache_size = cache_size
        self.token_time_to_live = token_time_to_live
        self._plugins: dict[str, CredentialsPlugin] = {}

    @classmethod
    def from_settings(
        cls, settings: Settings, options: dict[str, Any] | None = None
    ) -> "Credentials":
        return cls(
            options=options,
            cache_size=settings.cache.max_size,
            token_time_to_live=settings.cache.token_time_to_live,
        )

    def register(self, plugin: CredentialsPlugin) -> None:
        """Register a plugin, giving it a profile cache if it has none.

        Raises:
            ValueError: If a plugin with the same name is already registered
        """
        if plugin.name in self._plugins:
            raise ValueError(f"Plugin '{plugin.name}' is already registered")
        if plugin.users_cache is None:
            plugin.users_cache = TokenCache(
                max_size=self.cache_size, ttl=self.token_time_to_live
            )
        self._plugins[plugin.name] = plugin
        logger.debug(
            "credentials_plugin_registered",
            plugin=plugin.name,
            redirecting=plugin.redirecting,
        )

    def get(self, name: str) -> CredentialsPlugin | None:
        return self._plugins.get(name)

    @property
    def plugins(self) -> list[CredentialsPlugin]:
        return list(self._plugins.values())

    async def authenticate(self, request: Request) -> UserProfile | None:
        """Authenticate ``request`` with the non-redirecting plugins.

        Returns:
            The authenticated profile, or None if every plugin passed

        Raises:
            AuthenticationError: If a plugin rejected the request
        """
        existing = getattr(request.state, USER_PROFILE_STATE_KEY, None)
        if isinstance(existing, UserProfile):
            return existing

        for plugin in self._plugins.values():
            if plugin.redirecting:
                continue
            result = await plugin.authenticate(request, self.options)
            if result.is_success and result.profile is not None:
                setattr(request.state, USER_PROFILE_STATE_KEY, result.profile)
                return result.profile
            if result.status is AuthStatus.FAILURE:
                logger.info(
                    "credentials_authentication_failed",
                    plugin=plugin.name,
                    path=request.url.path,
                    category="auth",
                )
                raise AuthenticationError(
                    "Authentication failed",
                    status_code=result.http_status or status.HTTP_401_UNAUTHORIZED,
                    headers=result.headers,
                )
        return None

    async def login(
        self, request: Request, plugin_name: str
    ) -> UserProfile | RedirectResponse:
        """Run a redirecting plugin for the login and callback routes.

        Returns:
            A redirect to the provider's login page, or the authenticated profile

        Raises:
            KeyError: If no plugin named ``plugin_name`` is registered
            AuthenticationError: If the plugin rejected the callback
        """
        plugin = self._plugins.get(plugin_name)
        if plugin is None:
            raise KeyError(f"No credentials plugin registered as '{plugin_name}'")

        result = await plugin.authenticate(request, self.options)
        if result.status is AuthStatus.IN_PROGRESS and result.redirect_url:
            return RedirectResponse(result.redirect_url, status_code=status.HTTP_302_FOUND)
        if result.is_success and result.profile is not None:
            setattr(request.state, USER_PROFILE_STATE_KEY, result.profile)
            return result.profile
        raise AuthenticationError(
            "Authentication failed",
            status_code=result.http_status or status.HTTP_401_UNAUTHORIZED,
            headers=result.headers,
        )

    # ==================== FastAPI dependencies ====================

    async def optional_user(self, request: Request) -> UserProfile | None:
        """Dependency returning the profile, or None when no plugin applies."""
        try:
            return await self.authenticate(request)
        except AuthenticationError as e:
            raise HTTPException(
                status_code=e.status_code, detail=e.message, headers=e.headers or None
            ) from e

    async def require_user(self, request: Request) -> UserProfile:
        """Dependency returning the profile or answering 401."""
        profile = await self.optional_user(request)
        if profile is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication required",
            )
        return profile
