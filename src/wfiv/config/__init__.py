"""Configuration management for wfiv.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- RenderConfig: Preview style settings shared by a run
- CacheConfig: On-disk HTTP cache settings
- ApiConfig: Webfonts API settings
- LoggingConfig: Logging settings
- WfivSettings: Main application settings
"""

from wfiv.config.settings import (
    ApiConfig,
    CacheConfig,
    FontStyle,
    FontVariant,
    LoggingConfig,
    RenderConfig,
    WfivSettings,
    default_cache_dir,
    get_default_settings,
)

__all__ = [
    "ApiConfig",
    "CacheConfig",
    "FontStyle",
    "FontVariant",
    "LoggingConfig",
    "RenderConfig",
    "WfivSettings",
    "default_cache_dir",
    "get_default_settings",
]
