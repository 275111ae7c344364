"""
Utilities package for caching and time handling.
"""

from .cache_utils import CacheStats, get_cached_value, memoize
from .time_utils import (
    SWEDEN_TIMEZONE,
    get_timezone,
    localize,
    now_local,
    hour_start,
    day_start,
    next_day_start,
    to_epoch_ms,
    parse_iso,
    parse_timestamp_ms,
    is_on_the_hour,
    format_time_label,
)

__all__ = [
    "CacheStats",
    "get_cached_value",
    "memoize",
    "SWEDEN_TIMEZONE",
    "get_timezone",
    "localize",
    "now_local",
    "hour_start",
    "day_start",
    "next_day_start",
    "to_epoch_ms",
    "parse_iso",
    "parse_timestamp_ms",
    "is_on_the_hour",
    "format_time_label",
]
