"""Credential plugin interface.

A plugin inspects an incoming request and reports one of four outcomes:
the user was authenticated, authentication failed, the request does not carry
credentials the plugin understands (pass), or the user has to be redirected to
a login page first (in progress).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from starlette.requests import Request

from .cache import TokenCache
from .models import UserProfile, UserProfileDelegate


ProfileT = TypeVar("ProfileT")


class AuthStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    PASS = "pass"
    IN_PROGRESS = "in_progress"


@dataclass
class AuthResult(Generic[ProfileT]):
    """Outcome of a single authentication attempt."""

    status: AuthStatus
    profile: ProfileT | None = None
    http_status: int | None = None
    headers: dict[str, str] = field(default_factory=dict)
    redirect_url: str | None = None

    @classmethod
    def success(cls, profile: ProfileT) -> "AuthResult[ProfileT]":
        return cls(AuthStatus.SUCCESS, profile=profile)

    @classmethod
    def failure(
        cls, http_status: int | None = None, headers: dict[str, str] | None = None
    ) -> "AuthResult[ProfileT]":
        return cls(AuthStatus.FAILURE, http_status=http_status, headers=headers or {})

    @classmethod
    def passed(
        cls, http_status: int | None = None, headers: dict[str, str] | None = None
    ) -> "AuthResult[ProfileT]":
        return cls(AuthStatus.PASS, http_status=http_status, headers=headers or {})

    @classmethod
    def in_progress(cls, redirect_url: str) -> "AuthResult[ProfileT]":
        return cls(AuthStatus.IN_PROGRESS, redirect_url=redirect_url)

    @property
    def is_success(self) -> bool:
        return self.status is AuthStatus.SUCCESS


class CredentialsPlugin(ABC):
    """Base class for credential plugins registered with ``Credentials``."""

    #: Profile cache, assigned on registration when the plugin has none.
    users_cache: TokenCache[UserProfile] | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Name the plugin is registered under."""

    @property
    @abstractmethod
    def redirecting(self) -> bool:
        """Whether the plugin authenticates by redirecting to a login page."""

    @property
    def user_profile_delegate(self) -> UserProfileDelegate | None:
        return None

    @abstractmethod
    async def authenticate(
        self, request: Request, options: dict[str, Any] | None = None
    ) -> AuthResult[UserProfile]:
        """Authenticate an incoming request.

        Args:
            request: The incoming request
            options: Per-request plugin options

        Returns:
            The outcome of the authentication attempt
        """
