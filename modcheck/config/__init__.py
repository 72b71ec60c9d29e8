"""Configuration module for modcheck.

This module provides centralized, type-safe configuration management
using pydantic-settings with environment variable loading.

Usage:
    from modcheck.config import get_settings

    settings = get_settings()

    # Default checklist file and parser options
    path = settings.checklist.file
    tab_size = settings.checklist.tab_size
"""

from modcheck.config.settings import (
    ChecklistSettings,
    LoggingSettings,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "ChecklistSettings",
    "LoggingSettings",
    "Settings",
    "get_settings",
    "reset_settings",
]
