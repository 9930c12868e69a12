"""Facebook Graph API client used by the credential plugins."""

from typing import Any

import httpx

from credentials_facebook.config.settings import Settings
from credentials_facebook.core.logging import get_logger, mask_token
from credentials_facebook.exceptions import GraphAPIError, TokenExchangeError


logger = get_logger(__name__)

DEFAULT_GRAPH_URL = "https://graph.facebook.com"
DEFAULT_API_VERSION = "v2.3"


class GraphAPIClient:
    """Thin async binding over the Graph API endpoints the plugins need.

    Every call either returns the decoded payload or raises ``GraphAPIError``;
    there is no retry.
    """

    def __init__(
        self,
        graph_url: str = DEFAULT_GRAPH_URL,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        connect_timeout: float = 5.0,
        verify: bool = True,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            graph_url: Base URL of the Graph API
            api_version: Version prefix used for the code exchange endpoint
            timeout: Total request timeout in seconds
            connect_timeout: Connection timeout in seconds
            verify: Verify TLS certificates
            client: Optional shared ``httpx.AsyncClient``; one is created
                per request otherwise
        """
        self.graph_url = graph_url.rstrip("/")
        self.api_version = api_version.strip("/")
        self.timeout = httpx.Timeout(timeout, connect=connect_timeout)
        self.verify = verify
        self._client = client

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.AsyncClient | None = None
    ) -> "GraphAPIClient":
        return cls(
            graph_url=settings.facebook.graph_url,
            api_version=settings.facebook.graph_api_version,
            timeout=settings.http.timeout,
            connect_timeout=settings.http.connect_timeout,
            verify=settings.http.verify,
            client=client,
        )

    async def _send(self, path: str, params: dict[str, str]) -> httpx.Response:
        url = f"{self.graph_url}{path}"
        headers = {"Accept": "application/json"}
        if self._client is not None:
            return await self._client.get(
                url, params=params, headers=headers, timeout=self.timeout
            )
        async with httpx.AsyncClient(timeout=self.timeout, verify=self.verify) as client:
            return await client.get(url, params=params, headers=headers)

    async def _get(self, path: str, params: dict[str, str], operation: str) -> httpx.Response:
        try:
            response = await self._send(path, params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error_detail = self._extract_error_detail(e.response)
            logger.error(
                "graph_api_http_error",
                operation=operation,
                status_code=e.response.status_code,
                error_detail=error_detail,
                category="auth",
            )
            raise GraphAPIError(
                f"Graph API {operation} failed: {error_detail}",
                upstream_status=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            logger.error("graph_api_timeout", operation=operation, error=str(e))
            raise GraphAPIError(f"Graph API {operation} timed out") from e
        except httpx.HTTPError as e:
            logger.error("graph_api_transport_error", operation=operation, error=str(e))
            raise GraphAPIError(f"HTTP error during Graph API {operation}: {e}") from e
        return response

    @staticmethod
    def _extract_error_detail(response: httpx.Response) -> str:
        """Extract a readable error from a Graph API error response."""
        try:
            error_data = response.json()
        except ValueError:
            text = response.text
            return text[:200] if len(text) > 200 else text
        error = error_data.get("error") if isinstance(error_data, dict) else None
        if isinstance(error, dict):
            return str(error.get("message", error))
        if error is not None:
            return str(error_data.get("error_description", error))
        return str(error_data)[:200]

    @staticmethod
    def _json_object(response: httpx.Response, operation: str) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise GraphAPIError(
                f"Graph API {operation} returned invalid JSON",
                upstream_status=response.status_code,
            ) from e
        if not isinstance(data, dict):
            raise GraphAPIError(
                f"Graph API {operation} returned {type(data).__name__}, expected object",
                upstream_status=response.status_code,
            )
        return data

    async def exchange_code(
        self,
        code: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> str:
        """Exchange an authorization code for an access token.

        Args:
            code: Authorization code received on the login callback
            client_id: Facebook App ID
            client_secret: Facebook App Secret
            redirect_uri: Callback URL used for the login dialog

        Returns:
            The access token

        Raises:
            TokenExchangeError: If Facebook rejects the code or omits the token
        """
        path = f"/{self.api_version}/oauth/access_token"
        params = {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "client_secret": client_secret,
            "code": code,
        }
        logger.debug("token_exchange_start", has_code=bool(code), category="auth")
        try:
            response = await self._get(path, params, "token_exchange")
            data = self._json_object(response, "token_exchange")
        except GraphAPIError as e:
            raise TokenExchangeError(e.message, upstream_status=e.upstream_status) from e

        token = data.get("access_token")
        if not isinstance(token, str) or not token:
            logger.error(
                "token_exchange_missing_access_token",
                response_keys=list(data.keys()),
                category="auth",
            )
            raise TokenExchangeError(
                "Token exchange response has no access_token",
                upstream_status=response.status_code,
            )
        logger.debug(
            "token_exchange_success",
            expires_in=data.get("expires_in"),
            category="auth",
        )
        return token

    async def _get_me(self, access_token: str, fields: str | None) -> httpx.Response:
        params = {"access_token": access_token}
        if fields:
            params["fields"] = fields
        logger.debug(
            "graph_profile_request",
            token=mask_token(access_token),
            fields=fields,
            category="auth",
        )
        return await self._get("/me", params, "profile")

    async def get_profile_raw(self, access_token: str, fields: str | None = None) -> bytes:
        """Fetch ``/me`` for ``access_token`` and return the raw response body."""
        response = await self._get_me(access_token, fields)
        return response.content

    async def get_profile(
        self, access_token: str, fields: str | None = None
    ) -> dict[str, Any]:
        """Fetch ``/me`` for ``access_token`` as a JSON object.

        Args:
            access_token: Facebook OAuth token
            fields: Comma-separated field list; Facebook returns ``id`` and
                ``name`` when omitted

        Returns:
            Decoded profile object
        """
        response = await self._get_me(access_token, fields)
        return self._json_object(response, "profile")

    async def get_app(self, access_token: str) -> dict[str, Any]:
        """Fetch the app a token was issued for (``/app``)."""
        response = await self._get("/app", {"access_token": access_token}, "app")
        return self._json_object(response, "app")
