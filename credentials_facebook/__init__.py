"""Facebook OAuth credential plugins for FastAPI applications."""

from .credentials import (
    AuthResult,
    AuthStatus,
    Credentials,
    CredentialsPlugin,
    TokenCache,
    UserProfile,
    UserProfileDelegate,
)
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    CredentialsFacebookError,
    GraphAPIError,
    TokenExchangeError,
)
from .options import CredentialsFacebookOptions
from .plugins import CredentialsFacebook, CredentialsFacebookToken
from .typesafe import (
    FacebookTokenProfile,
    TypeSafeFacebook,
    TypeSafeFacebookToken,
    facebook_profile,
    optional_facebook_profile,
)


__version__ = "0.4.0"

__all__ = [
    "AuthResult",
    "AuthStatus",
    "AuthenticationError",
    "ConfigurationError",
    "Credentials",
    "CredentialsFacebook",
    "CredentialsFacebookError",
    "CredentialsFacebookOptions",
    "CredentialsFacebookToken",
    "CredentialsPlugin",
    "FacebookTokenProfile",
    "GraphAPIError",
    "TokenCache",
    "TokenExchangeError",
    "TypeSafeFacebook",
    "TypeSafeFacebookToken",
    "UserProfile",
    "UserProfileDelegate",
    "__version__",
    "facebook_profile",
    "optional_facebook_profile",
]
