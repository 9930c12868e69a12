import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from credentials_facebook.core.logging import get_logger, setup_logging
from credentials_facebook.exceptions import ConfigurationError

from .core import CacheSettings, HTTPSettings, LoggingSettings
from .facebook import FacebookSettings


__all__ = ["Settings", "ConfigurationError", "get_settings"]

ENV_PREFIX = "CREDENTIALS_FACEBOOK_"


class Settings(BaseSettings):
    """
    Configuration settings for the Facebook credential plugins.

    Settings are loaded from environment variables (prefixed with
    ``CREDENTIALS_FACEBOOK_``, nested with ``__``), a ``.env`` file and an
    optional TOML configuration file. Environment variables take precedence
    over values from the TOML file.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    facebook: FacebookSettings = Field(
        default_factory=FacebookSettings,
        description="Facebook OAuth application settings",
    )

    cache: CacheSettings = Field(
        default_factory=CacheSettings,
        description="Token profile cache settings",
    )

    http: HTTPSettings = Field(
        default_factory=HTTPSettings,
        description="HTTP client configuration for Graph API calls",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    def configure_logging(self) -> None:
        """Apply the ``logging`` section through ``setup_logging``."""
        setup_logging(
            level=self.logging.level,
            json_logs=self.logging.format == "json",
            show_path=self.logging.show_path,
            console_width=self.logging.console_width,
        )

    def model_dump_safe(self) -> dict[str, Any]:
        """Dump settings with the client secret masked."""
        return self.model_dump(mode="json")

    @classmethod
    def load_toml_config(cls, toml_path: Path) -> dict[str, Any]:
        """Load configuration from a TOML file."""
        try:
            with toml_path.open("rb") as f:
                return tomllib.load(f)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read TOML config file {toml_path}: {e}"
            ) from e
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {toml_path}: {e}") from e

    @classmethod
    def environment_keys(cls) -> set[str]:
        """Upper-cased names of variables set in the environment or ``.env`` file."""
        keys = {key.upper() for key in os.environ}
        env_file = cls.model_config.get("env_file")
        env_files = env_file if isinstance(env_file, (list, tuple)) else [env_file]
        for path in env_files:
            if path is not None and Path(path).is_file():
                values = dotenv_values(
                    path, encoding=cls.model_config.get("env_file_encoding")
                )
                keys.update(
                    key.upper() for key, value in values.items() if value is not None
                )
        return keys

    @classmethod
    def from_config(
        cls, config_path: Path | str | None = None, **kwargs: Any
    ) -> "Settings":
        """Create a Settings instance from a TOML configuration file.

        Args:
            config_path: Path to the TOML file; falls back to the
                ``CREDENTIALS_FACEBOOK_CONFIG_FILE`` environment variable
            **kwargs: Section overrides applied last, e.g. ``cache={"max_size": 10}``

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path_env = os.environ.get(f"{ENV_PREFIX}CONFIG_FILE")
            if config_path_env:
                config_path = Path(config_path_env)

        if isinstance(config_path, str):
            config_path = Path(config_path)

        config_data: dict[str, Any] = {}
        if config_path is not None:
            if config_path.suffix.lower() != ".toml":
                raise ConfigurationError(
                    f"Unsupported config file format: {config_path.suffix}. "
                    "Only TOML (.toml) files are supported."
                )
            config_data = cls.load_toml_config(config_path)
            get_logger(__name__).info(
                "config_file_loaded", path=str(config_path), category="config"
            )

        settings = cls()
        env_keys = cls.environment_keys()

        for section, values in config_data.items():
            current = getattr(settings, section, None)
            if not isinstance(current, BaseModel) or not isinstance(values, dict):
                continue
            merged = current.model_dump()
            for key, value in values.items():
                env_key = f"{ENV_PREFIX}{section.upper()}__{key.upper()}"
                if env_key not in env_keys:
                    merged[key] = value
            setattr(settings, section, type(current).model_validate(merged))

        for section, overrides in kwargs.items():
            current = getattr(settings, section, None)
            if isinstance(current, BaseModel) and isinstance(overrides, dict):
                merged = {**current.model_dump(), **overrides}
                setattr(settings, section, type(current).model_validate(merged))

        return settings


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()
