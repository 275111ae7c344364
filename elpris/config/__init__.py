"""
Configuration package for application settings.
"""

from .settings import (
    ApplicationConfig,
    APIConfig,
    SpotPriceAPIConfig,
    CacheConfig,
    WindowConfig,
    PreferenceConfig,
    LoggingConfig,
    app_config,
    configure_logging,
)
from .regions import (
    VALID_REGIONS,
    VALID_THEMES,
    REGION_NAMES,
    REGION_DESCRIPTIONS,
    is_valid_region,
    is_valid_theme,
)

__all__ = [
    "ApplicationConfig",
    "APIConfig",
    "SpotPriceAPIConfig",
    "CacheConfig",
    "WindowConfig",
    "PreferenceConfig",
    "LoggingConfig",
    "app_config",
    "configure_logging",
    "VALID_REGIONS",
    "VALID_THEMES",
    "REGION_NAMES",
    "REGION_DESCRIPTIONS",
    "is_valid_region",
    "is_valid_theme",
]
