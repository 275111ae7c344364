"""
Background service for periodic dashboard refreshes.

Keeps the latest snapshot per region and rebuilds it on a fixed interval
so requests are normally served from memory. Refresh cycles are
serialized; a request that finds a stale snapshot refreshes inline.
"""

import asyncio
import logging
import threading
import time
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Dict, Optional, Tuple

from .price_service import PriceService
from ..config import app_config
from ..models import DashboardResponse
from ..utils import hour_start, now_local


class RefreshService:
    """
    Periodic refresher for dashboard snapshots.

    Features:
    - Refreshes every known region at a configurable interval
    - Serves snapshots younger than the interval and from the current hour
    - Never runs two refresh cycles at the same time
    - Logs failures without stopping the loop
    """

    def __init__(self, price_service: Optional[PriceService] = None, interval_seconds: Optional[int] = None,
                 default_region: Optional[str] = None):
        self.price_service = price_service or PriceService()
        self.interval_seconds = (
            interval_seconds if interval_seconds is not None else app_config.cache.update_interval_seconds
        )
        self.default_region = default_region or app_config.preferences.default_region
        self.logger = logging.getLogger(__name__)
        self.snapshots: Dict[str, Tuple[float, datetime, DashboardResponse]] = {}
        self.is_running = False
        self.last_refresh: Optional[datetime] = None
        self._lock = threading.Lock()
        self._task: Optional[asyncio.Task] = None

    def refresh(self, region: str, now: Optional[datetime] = None) -> DashboardResponse:
        """Run one refresh cycle for region and store the result."""
        with self._lock:
            snapshot = self.price_service.build_dashboard(region, now=now)
            current = now or now_local(self.price_service.tz)
            self.snapshots[region] = (time.monotonic(), hour_start(current), snapshot)
            self.last_refresh = current
        self.logger.info(f"✅ Refreshed {region}: {len(snapshot.hourly_prices)} tiles, status {snapshot.status}")
        return snapshot

    def is_fresh(self, region: str, now: Optional[datetime] = None) -> bool:
        entry = self.snapshots.get(region)
        if entry is None:
            return False
        refreshed_at, refreshed_hour, _ = entry
        current_hour = hour_start(now or now_local(self.price_service.tz))
        return time.monotonic() - refreshed_at < self.interval_seconds and refreshed_hour == current_hour

    def get_snapshot(self, region: str) -> DashboardResponse:
        """Return the stored snapshot for region, refreshing it when stale."""
        if self.is_fresh(region):
            return self.snapshots[region][2]
        return self.refresh(region)

    async def get_snapshot_async(self, region: str) -> DashboardResponse:
        return await asyncio.get_event_loop().run_in_executor(None, self.get_snapshot, region)

    async def refresh_async(self, region: str) -> DashboardResponse:
        return await asyncio.get_event_loop().run_in_executor(None, self.refresh, region)

    async def refresh_all_once(self) -> None:
        """Refresh the default region and every region already served."""
        regions = [self.default_region] + [r for r in self.snapshots if r != self.default_region]
        for region in regions:
            try:
                await self.refresh_async(region)
            except Exception as e:
                self.logger.error(f"❌ Refresh failed for {region}: {e}")

    async def start_periodic_refresh(self):
        """Start the periodic refresh background task."""
        if self.is_running:
            self.logger.warning("⚠️  Refresh service is already running")
            return

        self.is_running = True
        self.logger.info(f"🚀 Starting periodic refresh service (interval: {self.interval_seconds}s)")

        # Warm the default region immediately
        await self.refresh_all_once()

        self._task = asyncio.create_task(self._periodic_refresh_loop())

    async def stop_periodic_refresh(self):
        """Stop the periodic refresh background task."""
        if not self.is_running:
            return

        self.is_running = False
        self.logger.info("🛑 Stopping periodic refresh service")

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def _periodic_refresh_loop(self):
        while self.is_running:
            try:
                await asyncio.sleep(self.interval_seconds)

                if self.is_running:
                    await self.refresh_all_once()

            except asyncio.CancelledError:
                self.logger.info("📴 Periodic refresh loop cancelled")
                break
            except Exception as e:
                self.logger.error(f"❌ Error in periodic refresh loop: {e}")
                await asyncio.sleep(60)


# Global refresh service instance
refresh_service = RefreshService()


@asynccontextmanager
async def lifespan(app):
    """FastAPI lifespan context manager for the refresh loop."""
    await refresh_service.start_periodic_refresh()

    try:
        yield
    finally:
        await refresh_service.stop_periodic_refresh()
