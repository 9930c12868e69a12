"""Credential plugin framework: profile model, cache, plugin protocol and chain."""

from .base import AuthResult, AuthStatus, CredentialsPlugin
from .cache import BaseCacheElement, TokenCache, cache_for_type, clear_type_caches
from .manager import Credentials
from .models import (
    UserProfile,
    UserProfileDelegate,
    UserProfileEmail,
    UserProfileName,
    UserProfilePhoto,
)


__all__ = [
    "AuthResult",
    "AuthStatus",
    "BaseCacheElement",
    "Credentials",
    "CredentialsPlugin",
    "TokenCache",
    "UserProfile",
    "UserProfileDelegate",
    "UserProfileEmail",
    "UserProfileName",
    "UserProfilePhoto",
    "cache_for_type",
    "clear_type_caches",
]
