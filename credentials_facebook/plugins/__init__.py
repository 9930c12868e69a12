"""Facebook credential plugins."""

from .facebook import CredentialsFacebook
from .facebook_token import CredentialsFacebookToken


__all__ = ["CredentialsFacebook", "CredentialsFacebookToken"]
