"""Configuration models and helpers."""

from __future__ import annotations

from .settings import (
    OOB_REDIRECT_URI,
    AppSettings,
    ConfigurationError,
    GoogleOAuthSettings,
    LoggingSettings,
    ServerSettings,
    get_settings,
)

__all__ = [
    "OOB_REDIRECT_URI",
    "AppSettings",
    "ConfigurationError",
    "GoogleOAuthSettings",
    "LoggingSettings",
    "ServerSettings",
    "get_settings",
]
