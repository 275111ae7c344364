"""
Statistics models for window analysis.
"""

from typing import Optional

from pydantic import BaseModel


class Statistics(BaseModel):
    """Model for window statistics."""
    lowest: float = 0
    highest: float = 0
    average: str = "0.00"  # formatted with 2 decimals


class CacheStatsSnapshot(BaseModel):
    """Model for cache hit/miss counters."""
    hits: int
    misses: int
    total_requests: int
    hit_rate: float  # percent
    last_cleared: Optional[str] = None


class CacheStatsResponse(BaseModel):
    """Model for the cache statistics endpoint."""
    normalization: CacheStatsSnapshot
    categories: CacheStatsSnapshot
    cached_region: Optional[str] = None
    cached_records: int
