"""Configuration package for the secrets client."""

from .settings import (
    StorageSettings,
    AuthSettings,
    RemoteSettings,
    LoggingSettings,
    AppSettings,
    get_settings,
    set_settings
)

from .loader import (
    ConfigLoader,
    ConfigurationError
)

__all__ = [
    "StorageSettings",
    "AuthSettings",
    "RemoteSettings",
    "LoggingSettings",
    "AppSettings",
    "get_settings",
    "set_settings",

    "ConfigLoader",
    "ConfigurationError"
]
