"""
Service for the dashboard refresh cycle.

One cycle: fetch today and tomorrow -> keep hourly records -> normalize ->
select windows -> integrity check -> statistics -> dashboard payload.
"""

from datetime import datetime
from typing import Any, List, Optional, Sequence

from fastapi import HTTPException

from .base_service import BaseService
from .normalizer_service import NormalizationCache, PriceNormalizer
from .statistics_service import StatisticsService, color_for_category
from .window_service import select_windows
from ..config import ApplicationConfig, VALID_REGIONS, app_config, is_valid_region
from ..exceptions import CacheIntegrityError, NoDataError
from ..models import (
    CacheStatsResponse,
    CacheStatsSnapshot,
    ChartData,
    DashboardResponse,
    HourlyPrice,
    Statistics,
    WindowAnchor,
    WindowSelection,
)
from ..repositories import BaseRepository, SpotPriceRepository, filter_hourly_prices
from ..utils import format_time_label, get_timezone, localize, now_local


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class PriceService(BaseService):
    """Service for building dashboard snapshots."""

    def __init__(self, repository: BaseRepository = None, normalizer: PriceNormalizer = None,
                 statistics_service: StatisticsService = None, config: ApplicationConfig = None):
        """Initialize service with repository dependency injection."""
        super().__init__(repository or SpotPriceRepository())
        self.config = config or app_config
        self.tz = get_timezone(self.config.window.timezone)
        self.normalizer = normalizer or PriceNormalizer(
            NormalizationCache(self.config.cache.cache_duration_seconds), tz=self.tz
        )
        self.statistics_service = statistics_service or StatisticsService()
        # Category memo shares the normalization scope: region and expiry
        self.normalizer.on_invalidate = self.statistics_service.clear_cache

    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters for dashboard queries."""
        region = kwargs.get("region")

        if not is_valid_region(region):
            raise HTTPException(
                status_code=400,
                detail=f"Region must be one of {', '.join(VALID_REGIONS)}"
            )

        return True

    @staticmethod
    def verify_integrity(window: Sequence[Any]) -> None:
        """Check that every record in a window went through normalization.

        Raises:
            CacheIntegrityError: a record lacks a numeric timestamp or display price
        """
        for record in window:
            if not (_is_number(getattr(record, "timestamp", None))
                    and _is_number(getattr(record, "display_price", None))):
                raise CacheIntegrityError(f"Record {getattr(record, 'time_start', record)!r} is not normalized")

    def clear_caches(self) -> None:
        self.normalizer.invalidate()

    def build_dashboard(self, region: str, now: Optional[datetime] = None) -> DashboardResponse:
        """Fetch and process prices for region.

        Raises:
            NetworkError, InvalidFormatError: today's document could not be fetched
        """
        self.validate_input(region=region)
        now = localize(now, self.tz) if now else now_local(self.tz)

        raw = self.repository.fetch_today_and_tomorrow(region, now.date())
        return self.process_prices(raw, region, now)

    def process_prices(self, raw: List[Any], region: str, now: datetime) -> DashboardResponse:
        """Turn raw records into a dashboard snapshot for the instant now."""
        now = localize(now, self.tz)
        hourly = filter_hourly_prices(raw) if raw else []
        if raw and len(hourly) != len(raw):
            self.logger.info(f"Filtered {len(raw)} prices to {len(hourly)} hourly prices")

        records = self.normalizer.normalize(hourly, region=region, now=now)
        selection = select_windows(
            records,
            now,
            box_size=self.config.window.box_size,
            chart_size=self.config.window.chart_size,
            midnight_prep_hour=self.config.window.midnight_prep_hour,
            tz=self.tz,
        )
        return self.present(selection, region, now)

    def present(self, selection: WindowSelection, region: str, now: datetime) -> DashboardResponse:
        """Build the payload for the selected windows."""
        try:
            self.verify_integrity(selection.box_window)
            self.verify_integrity(selection.chart_window)
            if selection.is_empty:
                raise NoDataError("No price data available")
        except CacheIntegrityError as e:
            self.logger.error(f"❌ Cache integrity check failed: {e}")
            self.clear_caches()
            return self._empty_response(region, now, "Cache integrity check failed")
        except NoDataError as e:
            self.logger.warning(f"⚠️  {e}")
            return self._empty_response(region, now, str(e))

        box_window = selection.box_window
        chart_window = selection.chart_window

        if selection.limited_data:
            self.logger.warning(
                f"Limited price data: {len(box_window)} hours for boxes, {len(chart_window)} hours for chart"
            )

        # Statistics always come from the chart window, the fuller visible range
        statistics = self.statistics_service.aggregate(chart_window)
        chart_categories = self.statistics_service.categorize_window(chart_window, statistics)

        # Tiles are ranked against each other
        box_categories = self.statistics_service.categorize_window(
            box_window, self.statistics_service.aggregate(box_window)
        )

        hourly_prices = [
            HourlyPrice(
                time_start=record.time_start,
                time_label=format_time_label(record.timestamp, self.tz),
                price=record.display_price,
                category=category,
            )
            for record, category in zip(box_window, box_categories)
        ]

        chart = ChartData(
            labels=[format_time_label(record.timestamp, self.tz) for record in chart_window],
            prices=[record.display_price for record in chart_window],
            categories=chart_categories,
            colors=[color_for_category(category) for category in chart_categories],
        )

        self.normalizer.cache.stats.log(self.logger)

        return DashboardResponse(
            region=region,
            generated_at=now.isoformat(),
            status="ok",
            anchor=selection.anchor,
            limited_data=selection.limited_data,
            hourly_prices=hourly_prices,
            chart=chart,
            statistics=statistics,
            cache_stats=CacheStatsSnapshot(**self.normalizer.cache.stats.snapshot()),
        )

    def _empty_response(self, region: str, now: datetime, message: str) -> DashboardResponse:
        return DashboardResponse(
            region=region,
            generated_at=now.isoformat(),
            status="no_data",
            message=message,
            anchor=WindowAnchor.NONE,
            limited_data=True,
            hourly_prices=[],
            chart=ChartData(),
            statistics=Statistics(lowest=0, highest=0, average="0.00"),
            cache_stats=CacheStatsSnapshot(**self.normalizer.cache.stats.snapshot()),
        )

    def get_cache_stats(self) -> CacheStatsResponse:
        cache = self.normalizer.cache
        return CacheStatsResponse(
            normalization=CacheStatsSnapshot(**cache.stats.snapshot()),
            categories=CacheStatsSnapshot(**self.statistics_service.cache_snapshot()),
            cached_region=cache.region,
            cached_records=len(cache),
        )
