"""
Controller for API information, health and cache endpoints.
"""

import asyncio
from datetime import datetime
from typing import List

from fastapi import Depends

from .base_controller import BaseController
from ..config import REGION_DESCRIPTIONS, REGION_NAMES, VALID_REGIONS, app_config
from ..models import APIInfo, CacheStatsResponse, HealthResponse, RegionInfo, UpstreamStatus
from ..services import RefreshService, refresh_service


def get_refresh_service() -> RefreshService:
    """Dependency injection for the shared RefreshService."""
    return refresh_service


class InfoController(BaseController):
    """Controller for API information and health endpoints."""

    def _setup_routes(self):
        """Setup routes for API info and health."""

        @self.router.get("/", response_model=APIInfo, tags=["System Information"])
        async def get_api_info():
            """API root endpoint with basic information."""
            return APIInfo(
                message=app_config.api.title,
                version=app_config.api.version,
                endpoints={
                    "dashboard": "/dashboard - Price tiles, chart series and statistics",
                    "refresh": "/refresh - Force a refresh for a region",
                    "regions": "/regions - Swedish price areas",
                    "preferences": "/preferences - Stored region and theme",
                    "cache_stats": "/cache-stats - Cache hit/miss counters",
                    "upstream_status": "/upstream-status - Price API reachability",
                    "health": "/health - Health check"
                }
            )

        @self.router.get("/health", response_model=HealthResponse, tags=["System Information"])
        async def health_check():
            """Health check endpoint."""
            return HealthResponse(
                status="healthy",
                service="elpris-dashboard-api"
            )

        @self.router.get("/regions", response_model=List[RegionInfo], tags=["System Information"])
        async def get_regions():
            """List the four Swedish price areas."""
            return [
                RegionInfo(code=code, name=REGION_NAMES[code], description=REGION_DESCRIPTIONS[code])
                for code in VALID_REGIONS
            ]

        @self.router.get("/upstream-status", response_model=UpstreamStatus, tags=["System Information"])
        async def get_upstream_status(service: RefreshService = Depends(get_refresh_service)):
            """Check whether the price API answers direct requests."""
            repository = service.price_service.repository
            accessible = await asyncio.get_event_loop().run_in_executor(None, repository.check_accessibility)
            return UpstreamStatus(
                accessible=accessible,
                url=app_config.spot_price_api.base_url,
                checked_at=datetime.now().isoformat()
            )

        @self.router.get("/cache-stats", response_model=CacheStatsResponse, tags=["System Information"])
        async def get_cache_stats(service: RefreshService = Depends(get_refresh_service)):
            """Hit/miss counters of the normalization and category caches."""
            try:
                return service.price_service.get_cache_stats()
            except Exception as e:
                self.handle_exception(e, "Error retrieving cache statistics")
