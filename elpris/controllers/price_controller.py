"""
Controller for dashboard price endpoints.

Tags:
    - price-data
    - dashboard
    - rest-endpoints

Endpoints:
    - GET /dashboard: Hourly tiles, chart series and statistics for a region
    - POST /refresh: Force a refresh cycle for a region
"""

from datetime import datetime
from typing import Optional

from fastapi import Depends, HTTPException, Query

from .base_controller import BaseController
from .info_controller import get_refresh_service
from .preference_controller import get_preference_service
from ..models import DashboardResponse, RefreshResponse
from ..services import PreferenceService, RefreshService


class PriceController(BaseController):
    """Controller for dashboard endpoints."""

    def _setup_routes(self):
        """Setup routes for price operations."""

        @self.router.get(
            "/dashboard",
            response_model=DashboardResponse,
            tags=["Price Data"],
            summary="Get the price dashboard for a region",
            description="""
            Hourly spot prices starting at the current hour.

            **Payload:**
            - **hourly_prices**: next 8 hours as compact tiles, categorized against each other
            - **chart**: next 16 hours with labels, prices, categories and colors
            - **statistics**: lowest, highest and average of the chart window (öre/kWh)

            Near midnight the windows continue into tomorrow's prices once they are
            published. When fewer hours are available `limited_data` is true; when no
            hours are available `status` is `no_data`.
            """,
            response_description="Dashboard snapshot"
        )
        async def get_dashboard(
            region: Optional[str] = Query(
                None,
                description="Price area SE1-SE4; defaults to the stored preference",
                pattern="^(SE1|SE2|SE3|SE4)$"
            ),
            refresh: RefreshService = Depends(get_refresh_service),
            preferences: PreferenceService = Depends(get_preference_service)
        ):
            """Get the dashboard snapshot, refreshing it when stale."""
            try:
                selected_region = region or preferences.get_region()
                return await refresh.get_snapshot_async(selected_region)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error loading price data")

        @self.router.post("/refresh", response_model=RefreshResponse, tags=["Price Data"])
        async def force_refresh(
            region: Optional[str] = Query(
                None,
                description="Price area SE1-SE4; defaults to the stored preference",
                pattern="^(SE1|SE2|SE3|SE4)$"
            ),
            refresh: RefreshService = Depends(get_refresh_service),
            preferences: PreferenceService = Depends(get_preference_service)
        ):
            """Run a refresh cycle now, bypassing the stored snapshot."""
            try:
                selected_region = region or preferences.get_region()
                snapshot = await refresh.refresh_async(selected_region)
                return RefreshResponse(
                    region=selected_region,
                    refreshed_at=datetime.now().isoformat(),
                    status=snapshot.status,
                    limited_data=snapshot.limited_data,
                    counts={
                        "hourly_prices": len(snapshot.hourly_prices),
                        "chart_points": len(snapshot.chart.prices)
                    }
                )
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error refreshing price data")
