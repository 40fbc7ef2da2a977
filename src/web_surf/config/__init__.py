"""
Configuration module for web-surf.

Provides Pydantic-based settings management with YAML file support
and environment variable overrides.
"""

from web_surf.config.settings import (
    Settings,
    BrowserSettings,
    BookmarkSettings,
    LoggingSettings,
)
from web_surf.config.loader import load_config, get_default_config_path

__all__ = [
    "Settings",
    "BrowserSettings",
    "BookmarkSettings",
    "LoggingSettings",
    "load_config",
    "get_default_config_path",
]
