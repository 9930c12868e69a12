"""Configuration module for credentials-facebook."""

from .core import CacheSettings, HTTPSettings, LoggingSettings
from .facebook import FacebookSettings
from .settings import ConfigurationError, Settings, get_settings


__all__ = [
    "CacheSettings",
    "ConfigurationError",
    "FacebookSettings",
    "HTTPSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
]
