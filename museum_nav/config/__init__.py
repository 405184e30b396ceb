"""
Configuration package for the Museum Navigation Backend.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    AuthSettings,
    NavigationSettings,
    StorageSettings,
    RedisSettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "AuthSettings",
    "NavigationSettings",
    "StorageSettings",
    "RedisSettings",
    "settings",
    "get_settings",
    "reload_settings",
]
