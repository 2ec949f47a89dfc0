"""Configuration package."""

from financehub.config.settings import (
    AppSettings,
    DashboardSettings,
    SavingsSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "DashboardSettings",
    "SavingsSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
