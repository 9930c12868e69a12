"""Keys of the plugin options dictionary.

Options are passed to the plugin constructors and, for token authentication,
per request through ``Credentials``.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from credentials_facebook.credentials.models import UserProfileDelegate


class CredentialsFacebookOptions:
    """Option keys understood by the Facebook plugins."""

    #: Facebook permissions to request during web login. Either a
    #: comma-separated string or a list of strings.
    SCOPE = "scope"

    #: Implementation of ``UserProfileDelegate`` used to update the profile.
    USER_PROFILE_DELEGATE = "user_profile_delegate"

    #: User fields to ask for. Either a comma-separated string or a list of
    #: strings. If left empty Facebook only returns ``id`` and ``name``.
    FIELDS = "fields"


def join_option(value: Any) -> str | None:
    """Normalize a string-or-list option into a comma-separated string."""
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, Iterable):
        joined = ",".join(str(item) for item in value)
        return joined or None
    return None


def get_scope(options: Mapping[str, Any] | None) -> str | None:
    if not options:
        return None
    return join_option(options.get(CredentialsFacebookOptions.SCOPE))


def get_fields(options: Mapping[str, Any] | None) -> str | None:
    if not options:
        return None
    return join_option(options.get(CredentialsFacebookOptions.FIELDS))


def get_user_profile_delegate(
    options: Mapping[str, Any] | None,
) -> UserProfileDelegate | None:
    if not options:
        return None
    delegate = options.get(CredentialsFacebookOptions.USER_PROFILE_DELEGATE)
    if isinstance(delegate, UserProfileDelegate):
        return delegate
    return None
