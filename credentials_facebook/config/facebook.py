"""Facebook application configuration."""

from typing import Annotated, Any

from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import NoDecode


def _split_csv(v: Any) -> Any:
    if isinstance(v, str):
        return [item.strip() for item in v.split(",") if item.strip()]
    return v


class FacebookSettings(BaseModel):
    """Settings for the Facebook OAuth application."""

    client_id: str = Field(
        default="",
        description="App ID of the app in the Facebook Developer dashboard",
    )

    client_secret: SecretStr | None = Field(
        default=None,
        description="App Secret of the app in the Facebook Developer dashboard",
    )

    callback_url: str = Field(
        default="",
        description="URL Facebook redirects back to after web login",
    )

    scope: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Facebook permissions requested during web login",
    )

    fields: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="User fields to request; empty means Facebook's default id and name",
    )

    graph_url: str = Field(
        default="https://graph.facebook.com",
        description="Base URL of the Facebook Graph API",
    )

    dialog_url: str = Field(
        default="https://www.facebook.com/dialog/oauth",
        description="Facebook login dialog URL",
    )

    graph_api_version: str = Field(
        default="v2.3",
        description="Graph API version used for the code exchange endpoint",
    )

    @field_validator("client_secret", mode="before")
    @classmethod
    def validate_client_secret(cls, v: Any) -> Any:
        """Convert string values to SecretStr."""
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return SecretStr(v)
        return v

    @field_validator("scope", "fields", mode="before")
    @classmethod
    def validate_csv(cls, v: Any) -> Any:
        """Accept comma-separated strings as well as lists."""
        return _split_csv(v)

    @field_validator("graph_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")
