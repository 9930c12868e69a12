"""Core configuration settings - HTTP, cache and logging."""

from pydantic import BaseModel, Field, field_validator


# === HTTP Configuration ===


class HTTPSettings(BaseModel):
    """HTTP client configuration for Graph API calls."""

    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Total timeout in seconds for a single Graph API request",
    )

    connect_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Connection timeout in seconds",
    )

    verify: bool = Field(
        default=True,
        description="Verify TLS certificates of graph.facebook.com",
    )


# === Cache Configuration ===


class CacheSettings(BaseModel):
    """Profile cache configuration."""

    max_size: int = Field(
        default=0,
        ge=0,
        description="Maximum number of cached token profiles (0 = unlimited)",
    )

    token_time_to_live: float | None = Field(
        default=None,
        gt=0,
        description=(
            "Seconds a cached profile is trusted before the token is validated "
            "against Facebook again (None = until evicted)"
        ),
    )


# === Logging Configuration ===


class LoggingSettings(BaseModel):
    """Logging configuration settings."""

    level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    format: str = Field(
        default="rich",
        description="Logging output format: 'rich' for development, 'json' for production",
    )

    show_path: bool = Field(
        default=False,
        description="Whether to show module path in console logs",
    )

    console_width: int | None = Field(
        default=None,
        description="Optional console width override for Rich output",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and normalize the log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        level = v.upper()
        if level not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return level

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the output format."""
        fmt = v.lower()
        if fmt not in ("rich", "json"):
            raise ValueError(f"Invalid log format: {v}. Must be 'rich' or 'json'")
        return fmt
