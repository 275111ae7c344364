"""
Application configuration settings.

Every section is a pydantic model with working defaults; values can be
overridden from the environment (or a .env file) with ELPRIS_* variables.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel


class APIConfig(BaseModel):
    """API configuration settings."""

    title: str = "Elpris Dashboard API"
    description: str = "Swedish day-ahead electricity spot prices, windowed for an hourly price dashboard"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = False

    # CORS settings
    allow_origins: list = ["*"]
    allow_credentials: bool = True
    allow_methods: list = ["*"]
    allow_headers: list = ["*"]


class SpotPriceAPIConfig(BaseModel):
    """Upstream price API settings."""

    base_url: str = "https://www.elprisetjustnu.se/api/v1/prices"
    fallback_proxies: List[str] = [
        "https://api.allorigins.win/raw?url=",
        "https://corsproxy.io/?",
    ]
    timeout_seconds: int = 15


class CacheConfig(BaseModel):
    """Cache lifetimes."""

    cache_duration_seconds: int = 3600  # normalization cache expiry
    update_interval_seconds: int = 600  # periodic dashboard refresh


class WindowConfig(BaseModel):
    """Display window settings."""

    box_size: int = 8
    chart_size: int = 16
    midnight_prep_hour: int = 22
    timezone: str = "Europe/Stockholm"


class PreferenceConfig(BaseModel):
    """Preference store settings."""

    default_region: str = "SE3"
    storage_dir: str = "data"  # Relative to the project root
    local_storage_file: str = "local_storage.json"
    cache_storage_file: str = "preferences_cache.db"
    cookie_max_age_days: int = 365


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ApplicationConfig:
    """Main application configuration."""

    def __init__(self):
        self.api = APIConfig()
        self.spot_price_api = SpotPriceAPIConfig()
        self.cache = CacheConfig()
        self.window = WindowConfig()
        self.preferences = PreferenceConfig()
        self.logging = LoggingConfig()

    @classmethod
    def from_environment(cls, env_path: Optional[Path] = None) -> "ApplicationConfig":
        """Create configuration from environment variables (and .env if present)."""
        if env_path is None:
            env_path = Path(__file__).parent.parent.parent / ".env"
        load_dotenv(env_path)

        config = cls()

        if os.getenv("ELPRIS_API_PORT"):
            config.api.port = int(os.getenv("ELPRIS_API_PORT"))

        if os.getenv("ELPRIS_API_DEBUG"):
            config.api.debug = os.getenv("ELPRIS_API_DEBUG").lower() == "true"

        if os.getenv("ELPRIS_PRICE_API_URL"):
            config.spot_price_api.base_url = os.getenv("ELPRIS_PRICE_API_URL")

        if os.getenv("ELPRIS_FETCH_TIMEOUT"):
            config.spot_price_api.timeout_seconds = int(os.getenv("ELPRIS_FETCH_TIMEOUT"))

        if os.getenv("ELPRIS_CACHE_DURATION"):
            config.cache.cache_duration_seconds = int(os.getenv("ELPRIS_CACHE_DURATION"))

        if os.getenv("ELPRIS_UPDATE_INTERVAL"):
            config.cache.update_interval_seconds = int(os.getenv("ELPRIS_UPDATE_INTERVAL"))

        if os.getenv("ELPRIS_DEFAULT_REGION"):
            config.preferences.default_region = os.getenv("ELPRIS_DEFAULT_REGION").upper()

        if os.getenv("ELPRIS_STORAGE_DIR"):
            config.preferences.storage_dir = os.getenv("ELPRIS_STORAGE_DIR")

        if os.getenv("ELPRIS_LOG_LEVEL"):
            config.logging.level = os.getenv("ELPRIS_LOG_LEVEL").upper()

        return config

    @property
    def storage_path(self) -> str:
        """Get the preference storage directory as an absolute path."""
        if os.path.isabs(self.preferences.storage_dir):
            return self.preferences.storage_dir
        # This file is in: elpris/config/settings.py
        project_dir = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        return os.path.join(project_dir, self.preferences.storage_dir)

    @property
    def is_debug(self) -> bool:
        """Check if debug mode is enabled."""
        return self.api.debug


def configure_logging(config: "ApplicationConfig" = None) -> None:
    """Apply the configured level and format to the root logger."""
    config = config or app_config
    level = logging.DEBUG if config.is_debug else getattr(logging, config.logging.level, logging.INFO)
    logging.basicConfig(level=level, format=config.logging.format)


# Global configuration instance
app_config = ApplicationConfig.from_environment()
