"""
Repository for the public Swedish spot price API (elprisetjustnu.se).

The API publishes one JSON document per price area and market day:

    https://www.elprisetjustnu.se/api/v1/prices/2025/01-15_SE3.json

Requests go to the API directly first and then through each configured
CORS proxy. The last good payload per (region, day) is kept so that a
network outage still serves the most recent known prices.
"""

import logging
import threading
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests

from .base_repository import BaseRepository
from ..config import SpotPriceAPIConfig, app_config
from ..exceptions import NetworkError, InvalidFormatError
from ..utils import is_on_the_hour, now_local


def format_date_for_api(day: date) -> str:
    """Format a date the way the API paths expect it: YYYY/MM-DD."""
    return f"{day.year}/{day.month:02d}-{day.day:02d}"


def filter_hourly_prices(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep only records starting on the hour.

    Newer documents carry quarter-hour records. If nothing starts on the hour
    the input is returned unchanged.
    """
    hourly = []
    for record in records:
        time_start = record.get("time_start") if isinstance(record, dict) else None
        if not isinstance(time_start, str):
            continue
        try:
            if is_on_the_hour(time_start):
                hourly.append(record)
        except ValueError:
            continue

    if not hourly:
        return list(records)
    return hourly


class SpotPriceRepository(BaseRepository):
    """Fetch layer for raw day-ahead price records."""

    def __init__(self, config: Optional[SpotPriceAPIConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or app_config.spot_price_api
        self.logger = logging.getLogger(__name__)

        # Session for persistent connections
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "User-Agent": "elpris-dashboard/1.0",
        })

        # Pruned to the day before each newly fetched day
        self._last_good: Dict[Tuple[str, date], List[Dict[str, Any]]] = {}
        self._last_good_lock = threading.Lock()

    def build_url(self, region: str, day: date) -> str:
        return f"{self.config.base_url}/{format_date_for_api(day)}_{region}.json"

    def _source_urls(self, url: str) -> List[str]:
        return [url] + [f"{proxy}{quote(url, safe='')}" for proxy in self.config.fallback_proxies]

    def _remember(self, cache_key: Tuple[str, date], payload: List[Dict[str, Any]]) -> None:
        """Store a good payload and drop documents older than the day before it."""
        oldest = cache_key[1] - timedelta(days=1)
        with self._last_good_lock:
            self._last_good[cache_key] = payload
            for key in [k for k in self._last_good if k[1] < oldest]:
                del self._last_good[key]

    def fetch_raw_prices(self, region: str, day: date) -> List[Dict[str, Any]]:
        """Fetch one market day, trying the direct URL and then each proxy."""
        url = self.build_url(region, day)
        cache_key = (region, day)
        bad_payload = False

        for source_url in self._source_urls(url):
            try:
                response = self.session.get(source_url, timeout=self.config.timeout_seconds)
                response.raise_for_status()
            except requests.RequestException as e:
                self.logger.info(f"Source failed for {url} via {source_url}: {e}")
                continue

            try:
                payload = response.json()
            except ValueError as e:
                self.logger.warning(f"Invalid JSON from {source_url}: {e}")
                bad_payload = True
                continue

            if not isinstance(payload, list):
                self.logger.warning(f"Unexpected payload type {type(payload).__name__} from {source_url}")
                bad_payload = True
                continue

            self._remember(cache_key, payload)
            return payload

        with self._last_good_lock:
            last_good = self._last_good.get(cache_key)
        if last_good is not None:
            self.logger.warning(f"⚠️  All sources failed for {url}, serving last known prices")
            return last_good

        if bad_payload:
            raise InvalidFormatError(f"Invalid data format received for {region} on {day}")
        raise NetworkError(f"Could not fetch price data from any source for {region} on {day}")

    def check_accessibility(self, region: str = "SE3", day: Optional[date] = None) -> bool:
        """Check that the API answers a direct request for today's document."""
        url = self.build_url(region, day or now_local().date())
        try:
            response = self.session.get(url, timeout=self.config.timeout_seconds)
            response.raise_for_status()
            return True
        except requests.RequestException as e:
            self.logger.error(f"API accessibility check failed: {e}")
            return False
