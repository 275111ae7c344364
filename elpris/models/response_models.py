"""
Response models for API endpoints.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel

from .price_models import PriceCategory, WindowAnchor
from .stats_models import Statistics, CacheStatsSnapshot


class HourlyPrice(BaseModel):
    """Model for one price tile in the hourly box view."""
    time_start: str
    time_label: str  # HH:MM, Stockholm time
    price: float  # öre per kWh
    category: PriceCategory


class ChartData(BaseModel):
    """Model for the trend chart series."""
    labels: List[str] = []
    prices: List[float] = []
    categories: List[PriceCategory] = []
    colors: List[str] = []


class DashboardResponse(BaseModel):
    """Model for the full dashboard payload."""
    region: str
    generated_at: str
    status: str  # "ok" or "no_data"
    message: Optional[str] = None
    anchor: WindowAnchor
    limited_data: bool
    hourly_prices: List[HourlyPrice]
    chart: ChartData
    statistics: Statistics
    cache_stats: Optional[CacheStatsSnapshot] = None


class APIInfo(BaseModel):
    """Model for API information."""
    message: str
    version: str
    endpoints: dict


class HealthResponse(BaseModel):
    """Model for health check response."""
    status: str
    service: str


class UpstreamStatus(BaseModel):
    """Model for upstream price API reachability."""
    accessible: bool
    url: str
    checked_at: str


class RegionInfo(BaseModel):
    """Model for one price area."""
    code: str
    name: str
    description: str


class RefreshResponse(BaseModel):
    """Model for a forced refresh."""
    region: str
    refreshed_at: str
    status: str
    limited_data: bool
    counts: Dict[str, int]
