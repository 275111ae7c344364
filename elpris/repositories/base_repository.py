"""
Base repository interface for price data access.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from typing import Any, Dict, List

from ..exceptions import NetworkError, InvalidFormatError


class BaseRepository(ABC):
    """Abstract price repository: one JSON document per region and market day."""

    logger = logging.getLogger(__name__)

    @abstractmethod
    def fetch_raw_prices(self, region: str, day: date) -> List[Dict[str, Any]]:
        """Fetch the raw records of one market day.

        Raises:
            NetworkError: no source could be reached
            InvalidFormatError: a source answered but not with a JSON list
        """
        pass

    def fetch_today_and_tomorrow(self, region: str, today: date) -> List[Dict[str, Any]]:
        """Fetch today's and tomorrow's documents concurrently and concatenate them.

        Tomorrow's prices are published around midday, so a failed tomorrow
        fetch only means fewer hours. A failed today fetch is re-raised.
        """
        tomorrow = today + timedelta(days=1)

        with ThreadPoolExecutor(max_workers=2) as executor:
            today_future = executor.submit(self.fetch_raw_prices, region, today)
            tomorrow_future = executor.submit(self.fetch_raw_prices, region, tomorrow)

            try:
                tomorrow_data = tomorrow_future.result()
            except (NetworkError, InvalidFormatError) as e:
                self.logger.warning(f"⚠️  Could not fetch tomorrow's prices ({tomorrow}, {region}): {e}")
                tomorrow_data = []

            try:
                today_data = today_future.result()
            except (NetworkError, InvalidFormatError) as e:
                self.logger.error(f"❌ Could not fetch today's prices ({today}, {region}): {e}")
                raise

        return list(today_data) + list(tomorrow_data)
