"""
Models package for API data structures.
Imports all models for easy access.
"""

# Price models
from .price_models import (
    PriceCategory,
    WindowAnchor,
    RawPriceRecord,
    NormalizedPriceRecord,
    WindowSelection,
)

# Statistics models
from .stats_models import Statistics, CacheStatsSnapshot, CacheStatsResponse

# Preference models
from .preference_models import Preferences, RegionUpdate, ThemeUpdate, PreferenceUpdateResponse

# Response models
from .response_models import (
    HourlyPrice,
    ChartData,
    DashboardResponse,
    APIInfo,
    HealthResponse,
    UpstreamStatus,
    RegionInfo,
    RefreshResponse,
)

__all__ = [
    # Price models
    "PriceCategory",
    "WindowAnchor",
    "RawPriceRecord",
    "NormalizedPriceRecord",
    "WindowSelection",

    # Statistics models
    "Statistics",
    "CacheStatsSnapshot",
    "CacheStatsResponse",

    # Preference models
    "Preferences",
    "RegionUpdate",
    "ThemeUpdate",
    "PreferenceUpdateResponse",

    # Response models
    "HourlyPrice",
    "ChartData",
    "DashboardResponse",
    "APIInfo",
    "HealthResponse",
    "UpstreamStatus",
    "RegionInfo",
    "RefreshResponse",
]
