"""End-to-end tests of the plugins mounted in a FastAPI application."""

import re
from collections.abc import AsyncIterator
from typing import Annotated, Any

import httpx
import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.responses import RedirectResponse
from pytest_httpx import HTTPXMock

from credentials_facebook import (
    Credentials,
    CredentialsFacebook,
    CredentialsFacebookToken,
    TypeSafeFacebookToken,
    UserProfile,
    facebook_profile,
    optional_facebook_profile,
)
from credentials_facebook.api import setup_error_handlers


ME_URL = re.compile(r"https://graph\.facebook\.com/me(\?.*)?$")
APP_URL = re.compile(r"https://graph\.facebook\.com/app(\?.*)?$")
TOKEN_URL = re.compile(r"https://graph\.facebook\.com/v2\.3/oauth/access_token(\?.*)?$")

TOKEN = "Test token"
CALLBACK_URL = "http://test/login/facebook"


class RouteToken(TypeSafeFacebookToken):
    email: str | None = None

    favourite_artist: str | None = None
    favourite_number: int | None = None

    app_id = "123"


FALLBACK_PROFILE = RouteToken(
    id="123", name="abc", email="def", favourite_artist="ghi", favourite_number=123
)


def create_app() -> FastAPI:
    app = FastAPI()
    setup_error_handlers(app)

    credentials = Credentials()
    credentials.register(CredentialsFacebookToken(options={"fields": "id,name,email"}))
    credentials.register(
        CredentialsFacebook(
            client_id="app-id",
            client_secret="app-secret",
            callback_url=CALLBACK_URL,
            options={"scope": "email"},
        )
    )

    @app.get("/singleHandler")
    async def single_handler(
        profile: Annotated[RouteToken, Depends(facebook_profile(RouteToken))],
    ) -> RouteToken:
        return profile

    @app.get("/multipleHandlers")
    async def multiple_handlers(
        profile: Annotated[
            RouteToken | None, Depends(optional_facebook_profile(RouteToken))
        ],
    ) -> RouteToken:
        return profile if profile is not None else FALLBACK_PROFILE

    @app.get("/profile")
    async def user_profile(
        user: Annotated[UserProfile, Depends(credentials.require_user)],
    ) -> dict[str, Any]:
        return user.model_dump()

    @app.get("/login/facebook", response_model=None)
    async def login(request: Request) -> RedirectResponse | dict[str, Any]:
        result = await credentials.login(request, "Facebook")
        if isinstance(result, RedirectResponse):
            return result
        return {"id": result.id, "display_name": result.display_name}

    return app


@pytest.fixture
async def client() -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.mark.integration
class TestTypeSafeRoutes:
    """Test routes protected by a type-safe token profile."""

    async def test_cached_profile(
        self, client: httpx.AsyncClient, facebook_response_body: bytes
    ) -> None:
        profile = RouteToken.decode_facebook_response(facebook_response_body)
        assert profile is not None
        RouteToken.save_in_cache(profile, TOKEN)

        response = await client.get(
            "/singleHandler",
            headers={"X-token-type": "FacebookToken", "access_token": TOKEN},
        )

        assert response.status_code == 200
        assert RouteToken.model_validate(response.json()) == profile

    async def test_missing_token_type(self, client: httpx.AsyncClient) -> None:
        """Test that requests without a Facebook token reach the fallback."""
        response = await client.get("/multipleHandlers", headers={"access_token": TOKEN})

        assert response.status_code == 200
        assert RouteToken.model_validate(response.json()) == FALLBACK_PROFILE

    async def test_missing_access_token(self, client: httpx.AsyncClient) -> None:
        response = await client.get(
            "/multipleHandlers", headers={"X-token-type": "FacebookToken"}
        )

        assert response.status_code == 401

    async def test_required_profile_without_token(
        self, client: httpx.AsyncClient
    ) -> None:
        response = await client.get("/singleHandler")

        assert response.status_code == 401
        assert response.json() == {"detail": "Authentication required"}

    async def test_validates_token_with_facebook(
        self,
        client: httpx.AsyncClient,
        httpx_mock: HTTPXMock,
        facebook_response_body: bytes,
    ) -> None:
        httpx_mock.add_response(url=APP_URL, json={"id": "123"})
        httpx_mock.add_response(url=ME_URL, content=facebook_response_body)

        response = await client.get(
            "/singleHandler",
            headers={"X-token-type": "FacebookToken", "access_token": TOKEN},
        )

        assert response.status_code == 200
        assert response.json()["email"] == "john_doe@invalid.com"
        assert response.json()["favourite_artist"] is None


@pytest.mark.integration
class TestCredentialsRoutes:
    """Test routes using the plugin chain."""

    async def test_token_plugin(
        self,
        client: httpx.AsyncClient,
        httpx_mock: HTTPXMock,
        facebook_response: dict[str, Any],
    ) -> None:
        httpx_mock.add_response(url=ME_URL, json=facebook_response)
        headers = {"X-token-type": "FacebookToken", "access_token": TOKEN}

        first = await client.get("/profile", headers=headers)
        second = await client.get("/profile", headers=headers)

        assert first.status_code == 200
        assert first.json()["id"] == "12345678901234567"
        assert first.json()["provider"] == "FacebookToken"
        assert second.json() == first.json()
        assert len(httpx_mock.get_requests()) == 1

    async def test_no_credentials(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/profile")

        assert response.status_code == 401
        assert response.json() == {"detail": "Authentication required"}

    async def test_login_redirect(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/login/facebook")

        assert response.status_code == 302
        location = response.headers["location"]
        assert location.startswith("https://www.facebook.com/dialog/oauth?")
        assert "scope=email" in location
        assert "response_type=code" in location

    async def test_login_callback(
        self,
        client: httpx.AsyncClient,
        httpx_mock: HTTPXMock,
        facebook_response: dict[str, Any],
    ) -> None:
        httpx_mock.add_response(url=TOKEN_URL, json={"access_token": "EAAB-token"})
        httpx_mock.add_response(url=ME_URL, json=facebook_response)

        response = await client.get("/login/facebook", params={"code": "auth-code"})

        assert response.status_code == 200
        assert response.json() == {"id": "12345678901234567", "display_name": "John Doe"}

    async def test_login_callback_failure(
        self, client: httpx.AsyncClient, httpx_mock: HTTPXMock
    ) -> None:
        """Test that a rejected code is answered through the error handlers."""
        httpx_mock.add_response(
            url=TOKEN_URL,
            status_code=400,
            json={"error": {"message": "This authorization code has expired."}},
        )

        response = await client.get("/login/facebook", params={"code": "old-code"})

        assert response.status_code == 401
        assert response.json() == {
            "error": {
                "type": "authentication_error",
                "message": "Authentication failed",
            }
        }
