"""Shared fixtures for the credentials-facebook test suite."""

import json
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from starlette.requests import Request

from credentials_facebook.credentials.cache import clear_type_caches


# A /me response fragment. Some optional fields are present (email,
# age_range, birthday, hometown); others (gender, location, ...) are not.
FACEBOOK_RESPONSE: dict[str, Any] = {
    "name_format": "{first} {last}",
    "id": "12345678901234567",
    "age_range": {"min": 21},
    "last_name": "Doe",
    "picture": {
        "data": {
            "url": "https://platform-lookaside.fbsbx.com/platform/profilepic/?asid=12345678901234567&height=50&width=50&ext=1234567890&hash=AaBbCcDdEeFfGgHh",
            "width": 50,
            "height": 50,
        }
    },
    "email": "john_doe@invalid.com",
    "short_name": "John",
    "birthday": "01/01/1970",
    "hometown": {"id": "123456789012345", "name": "Chicago"},
    "name": "John Doe",
    "first_name": "John",
}


@pytest.fixture
def facebook_response() -> dict[str, Any]:
    """A decoded Graph API /me response."""
    return json.loads(json.dumps(FACEBOOK_RESPONSE))


@pytest.fixture
def facebook_response_body() -> bytes:
    """The raw Graph API /me response body."""
    return json.dumps(FACEBOOK_RESPONSE).encode()


@pytest.fixture(autouse=True)
def reset_type_caches() -> Iterator[None]:
    """Give every test fresh per-type token caches."""
    clear_type_caches()
    yield
    clear_type_caches()


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Build a bare Starlette request with the given headers and query string."""

    def _make(
        headers: dict[str, str] | None = None,
        query_string: str = "",
        path: str = "/",
    ) -> Request:
        scope = {
            "type": "http",
            "method": "GET",
            "scheme": "http",
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 12345),
            "path": path,
            "root_path": "",
            "query_string": query_string.encode(),
            "headers": [
                (key.lower().encode(), value.encode())
                for key, value in (headers or {}).items()
            ],
        }
        return Request(scope)

    return _make


class FakeClock:
    """Stand-in for the ``time`` module used by the token caches."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def monotonic(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    """Control the clock token caches use for expiry."""
    clock = FakeClock()
    monkeypatch.setattr("credentials_facebook.credentials.cache.time", clock)
    return clock
