"""
Services package for business logic layer.
Imports all services for easy access.
"""

# Base service
from .base_service import BaseService

# Core pipeline
from .normalizer_service import NormalizationCache, PriceNormalizer, to_display_price, validate_price_data
from .window_service import select_windows
from .statistics_service import StatisticsService, classify_price, color_for_category

# Individual services
from .price_service import PriceService
from .preference_service import PreferenceService
from .refresh_service import RefreshService, refresh_service, lifespan

__all__ = [
    # Base service
    "BaseService",

    # Core pipeline
    "NormalizationCache",
    "PriceNormalizer",
    "to_display_price",
    "validate_price_data",
    "select_windows",
    "StatisticsService",
    "classify_price",
    "color_for_category",

    # Individual services
    "PriceService",
    "PreferenceService",
    "RefreshService",
    "refresh_service",
    "lifespan",
]
