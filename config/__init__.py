"""Configuration Package."""

from .settings import (
    LogSettings,
    NativeServiceSettings,
    ServiceOptions,
    get_log_settings,
    get_settings,
)

__all__ = [
    "LogSettings",
    "NativeServiceSettings",
    "ServiceOptions",
    "get_log_settings",
    "get_settings",
]
