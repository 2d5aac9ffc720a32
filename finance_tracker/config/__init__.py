"""Configuration package."""

from finance_tracker.config.settings import (
    AppSettings,
    CycleSettings,
    DocumentStoreSettings,
    GoogleSheetsSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "CycleSettings",
    "DocumentStoreSettings",
    "GoogleSheetsSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
