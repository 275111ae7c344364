"""
Repository package for data access layer.
"""

from .base_repository import BaseRepository
from .spot_price_repository import SpotPriceRepository, format_date_for_api, filter_hourly_prices
from .preference_repository import (
    PreferenceBackend,
    LocalStorageBackend,
    CookieBackend,
    CacheStorageBackend,
    PreferenceStore,
    create_preference_store,
)

__all__ = [
    "BaseRepository",
    "SpotPriceRepository",
    "format_date_for_api",
    "filter_hourly_prices",
    "PreferenceBackend",
    "LocalStorageBackend",
    "CookieBackend",
    "CacheStorageBackend",
    "PreferenceStore",
    "create_preference_store",
]
