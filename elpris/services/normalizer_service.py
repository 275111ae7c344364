"""
Normalization of raw API records.

Each raw record gets a numeric epoch-millisecond timestamp and a display
price in öre per kWh. Both derived values are memoized per raw time_start
string; the memo is dropped whole when the region changes or when it is
older than the configured cache duration.
"""

import logging
import math
from datetime import datetime
from numbers import Real
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..exceptions import ValidationError
from ..models import NormalizedPriceRecord, RawPriceRecord
from ..utils import CacheStats, get_cached_value, get_timezone, localize, now_local, parse_timestamp_ms


class NormalizationCache:
    """Derived timestamps and prices keyed by raw time_start."""

    def __init__(self, cache_duration_seconds: int = 3600, stats: Optional[CacheStats] = None):
        self.cache_duration_seconds = cache_duration_seconds
        self.stats = stats or CacheStats()
        self.timestamps: Dict[str, int] = {}
        self.prices: Dict[str, float] = {}
        self.last_update: Optional[float] = None  # epoch seconds
        self.region: Optional[str] = None

    def __len__(self) -> int:
        return len(self.timestamps)

    def should_invalidate(self, region: Optional[str], now: datetime) -> bool:
        return (
            self.last_update is None
            or now.timestamp() - self.last_update > self.cache_duration_seconds
            or self.region != region
        )

    def invalidate(self) -> None:
        self.timestamps.clear()
        self.prices.clear()
        self.last_update = None
        self.stats.mark_cleared()


def to_display_price(sek_per_kwh: float) -> float:
    """SEK/kWh to öre/kWh with 2 decimals; NaN becomes 0."""
    price = round(sek_per_kwh * 100, 2)
    return 0.0 if math.isnan(price) else price


def _is_valid_price(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and not math.isnan(value)


def _optional_number(value: Any) -> Optional[float]:
    return value if _is_valid_price(value) else None


def _as_fields(record: Any) -> Dict[str, Any]:
    """Return the wire-named fields of a raw record (dict or model)."""
    if isinstance(record, RawPriceRecord):
        return record.model_dump(by_alias=True)
    if isinstance(record, dict):
        return record
    raise ValidationError(f"Unsupported record type {type(record).__name__}")


def validate_price_data(data: Any) -> List[Dict[str, Any]]:
    """Check raw input and return it as a list of wire-named dicts.

    Raises:
        ValidationError: input is empty, not a sequence, or a record lacks
            time_start or has a non-numeric/NaN price
    """
    if isinstance(data, (str, bytes)) or not isinstance(data, Sequence) or len(data) == 0:
        raise ValidationError("Expected a non-empty list of price records")

    records = []
    for index, item in enumerate(data):
        fields = _as_fields(item)
        if not fields.get("time_start") or not isinstance(fields.get("time_start"), str):
            raise ValidationError(f"Record {index} has no time_start")
        if not _is_valid_price(fields.get("SEK_per_kWh")):
            raise ValidationError(f"Record {index} has an invalid SEK_per_kWh: {fields.get('SEK_per_kWh')!r}")
        records.append(fields)
    return records


class PriceNormalizer:
    """Turns raw records into NormalizedPriceRecord with a region-scoped memo."""

    def __init__(self, cache: Optional[NormalizationCache] = None, tz=None,
                 on_invalidate: Optional[Callable[[], None]] = None):
        self.cache = cache or NormalizationCache()
        self.tz = tz or get_timezone()
        # Called after every memo drop
        self.on_invalidate = on_invalidate
        self.logger = logging.getLogger(__name__)

    def invalidate(self) -> None:
        self.cache.invalidate()
        if self.on_invalidate is not None:
            self.on_invalidate()

    def _refresh_cache_scope(self, region: Optional[str], now: datetime) -> None:
        if self.cache.should_invalidate(region, now):
            if self.cache.last_update is None:
                reason = "no previous cache"
            elif self.cache.region != region:
                reason = f"region changed {self.cache.region} -> {region}"
            else:
                reason = "cache expired"
            self.logger.info(f"Invalidating normalization cache: {reason}")
            self.invalidate()
            self.cache.region = region

    def normalize(self, raw: Any, region: Optional[str] = None,
                  now: Optional[datetime] = None) -> List[NormalizedPriceRecord]:
        """Normalize raw records, preserving input order.

        Returns an empty list instead of raising when the input fails
        validation.
        """
        now = localize(now, self.tz) if now else now_local(self.tz)

        try:
            records = validate_price_data(raw)
            self._refresh_cache_scope(region, now)

            normalized = []
            for fields in records:
                time_key = fields["time_start"]
                try:
                    timestamp = get_cached_value(
                        self.cache.timestamps, time_key,
                        lambda: parse_timestamp_ms(time_key, self.tz),
                        self.cache.stats,
                    )
                except ValueError as e:
                    raise ValidationError(f"Unparseable time_start {time_key!r}: {e}") from e

                display_price = get_cached_value(
                    self.cache.prices, time_key,
                    lambda: to_display_price(fields["SEK_per_kWh"]),
                    self.cache.stats,
                )

                normalized.append(NormalizedPriceRecord(
                    time_start=time_key,
                    sek_per_kwh=fields["SEK_per_kWh"],
                    eur_per_kwh=_optional_number(fields.get("EUR_per_kWh")),
                    exchange_rate=_optional_number(fields.get("EXR")),
                    time_end=fields.get("time_end"),
                    timestamp=timestamp,
                    display_price=display_price,
                ))
        except ValidationError as e:
            self.logger.warning(f"⚠️  Invalid or empty price data received: {e}")
            return []

        self.cache.last_update = now.timestamp()
        return normalized
