"""FastAPI dependencies for type-safe Facebook token authentication."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from fastapi import HTTPException, Request, status

from credentials_facebook.credentials.base import AuthStatus

from .base import TypeSafeFacebookToken


ProfileT = TypeVar("ProfileT", bound=TypeSafeFacebookToken)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def facebook_profile(
    profile_type: type[ProfileT],
) -> Callable[[Request], Awaitable[ProfileT]]:
    """Dependency authenticating the request into ``profile_type``.

    Answers 401 when authentication fails or the request carries no
    Facebook token.
    """

    async def dependency(request: Request) -> ProfileT:
        result = await profile_type.authenticate(request)
        if result.is_success and result.profile is not None:
            return result.profile
        if result.status is AuthStatus.PASS:
            raise _unauthorized("Authentication required")
        raise _unauthorized("Authentication failed")

    return dependency


def optional_facebook_profile(
    profile_type: type[ProfileT],
) -> Callable[[Request], Awaitable[ProfileT | None]]:
    """Like ``facebook_profile`` but yields None when no Facebook token is sent."""

    async def dependency(request: Request) -> ProfileT | None:
        result = await profile_type.authenticate(request)
        if result.is_success and result.profile is not None:
            return result.profile
        if result.status is AuthStatus.PASS:
            return None
        raise _unauthorized("Authentication failed")

    return dependency
