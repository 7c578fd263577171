"""Configuration package."""

from paypal_liquidity.config.settings import (
    AppSettings,
    LoggingSettings,
    Settings,
    UploadSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "Settings",
    "UploadSettings",
    "get_settings",
    "validate_all_settings",
]
