"""Exceptions raised by the Facebook credential plugins."""

from typing import Any


class CredentialsFacebookError(Exception):
    """Base exception for credentials-facebook errors."""

    def __init__(
        self,
        message: str,
        error_type: str = "internal_server_error",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.status_code = status_code
        self.details = details or {}


class ConfigurationError(CredentialsFacebookError):
    """Raised when configuration loading or validation fails."""

    def __init__(self, message: str) -> None:
        super().__init__(
            message=message, error_type="configuration_error", status_code=500
        )


class AuthenticationError(CredentialsFacebookError):
    """Authentication error (401)."""

    def __init__(
        self,
        message: str = "Authentication failed",
        status_code: int = 401,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(
            message=message, error_type="authentication_error", status_code=status_code
        )
        self.headers = headers or {}


class GraphAPIError(CredentialsFacebookError):
    """Facebook Graph API call failed (502).

    ``upstream_status`` holds the status Facebook answered with, or ``None``
    when no response was received at all.
    """

    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_type="graph_api_error",
            status_code=502,
            details=details,
        )
        self.upstream_status = upstream_status


class TokenExchangeError(GraphAPIError):
    """Authorization code could not be exchanged for an access token."""

