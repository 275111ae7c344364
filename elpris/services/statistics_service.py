"""
Service for window statistics and price categorization.
"""

from typing import Dict, List, Sequence

from .base_service import BaseService
from ..exceptions import ValidationError
from ..models import NormalizedPriceRecord, PriceCategory, Statistics
from ..utils import CacheStats, memoize

LOW_THRESHOLD = 0.33
MEDIUM_THRESHOLD = 0.66

CATEGORY_COLORS = {
    PriceCategory.LOW: "#2ecc71",     # green
    PriceCategory.MEDIUM: "#f1c40f",  # yellow
    PriceCategory.HIGH: "#e74c3c",    # red
}


def classify_price(price: float, lowest: float, highest: float) -> PriceCategory:
    """
    Place a price in the low, medium or high third of [lowest, highest].

    Thresholds are inclusive, so a price exactly on a boundary falls in the
    lower category:
    - Low: price <= lowest + 0.33 * range
    - Medium: price <= lowest + 0.66 * range
    - High: anything above
    """
    price_range = highest - lowest
    if price <= lowest + price_range * LOW_THRESHOLD:
        return PriceCategory.LOW
    if price <= lowest + price_range * MEDIUM_THRESHOLD:
        return PriceCategory.MEDIUM
    return PriceCategory.HIGH


def color_for_category(category: PriceCategory) -> str:
    return CATEGORY_COLORS[category]


class StatisticsService(BaseService):
    """Service for statistics over a price window."""

    def __init__(self):
        super().__init__()
        self.category_stats = CacheStats()
        # Pure in (price, lowest, highest), so memoizing by the triple is safe
        self.categorize_price = memoize(self.category_stats)(classify_price)

    def validate_input(self, **kwargs) -> bool:
        """Validate that a window is a sequence of records."""
        window = kwargs.get("window")
        if window is None or isinstance(window, (str, bytes)) or not isinstance(window, Sequence):
            raise ValidationError("Window must be a sequence of price records")
        return True

    @staticmethod
    def aggregate(window: Sequence[NormalizedPriceRecord]) -> Statistics:
        """Lowest, highest and average display price of a window.

        An empty window gives zeroed statistics so presentation needs no
        special case.
        """
        if not window:
            return Statistics(lowest=0, highest=0, average="0.00")

        prices = [record.display_price for record in window]
        return Statistics(
            lowest=min(prices),
            highest=max(prices),
            average=f"{sum(prices) / len(prices):.2f}",
        )

    def categorize_window(self, window: Sequence[NormalizedPriceRecord],
                          statistics: Statistics) -> List[PriceCategory]:
        self.validate_input(window=window)
        return [
            self.categorize_price(record.display_price, statistics.lowest, statistics.highest)
            for record in window
        ]

    def clear_cache(self) -> None:
        self.categorize_price.cache_clear()

    def cache_snapshot(self) -> Dict:
        return self.category_stats.snapshot()
