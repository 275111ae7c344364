"""
Controller for user preference endpoints.

Tags:
    - preferences
    - region
    - theme

Endpoints:
    - GET /preferences: Stored region and theme
    - PUT /preferences/region: Save the selected price area
    - PUT /preferences/theme: Save the color theme
"""

from fastapi import Depends, HTTPException, Request, Response

from .base_controller import BaseController
from ..models import Preferences, PreferenceUpdateResponse, RegionUpdate, ThemeUpdate
from ..repositories import create_preference_store
from ..services import PreferenceService


def get_preference_service(request: Request, response: Response) -> PreferenceService:
    """Dependency injection for PreferenceService bound to this request's cookies."""
    store = create_preference_store(cookies=request.cookies, response=response)
    return PreferenceService(store)


class PreferenceController(BaseController):
    """Controller for preference endpoints."""

    def _setup_routes(self):
        """Setup routes for preference operations."""

        @self.router.get("/preferences", response_model=Preferences, tags=["Preferences"])
        async def get_preferences(service: PreferenceService = Depends(get_preference_service)):
            """Get the stored region (default SE3) and theme (null follows the system)."""
            try:
                return service.get_preferences()
            except Exception as e:
                self.handle_exception(e, "Error retrieving preferences")

        @self.router.put("/preferences/region", response_model=PreferenceUpdateResponse, tags=["Preferences"])
        async def set_region(update: RegionUpdate, service: PreferenceService = Depends(get_preference_service)):
            """Save the selected price area to every preference backend."""
            try:
                return service.set_region(update.region)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error saving region preference")

        @self.router.put("/preferences/theme", response_model=PreferenceUpdateResponse, tags=["Preferences"])
        async def set_theme(update: ThemeUpdate, service: PreferenceService = Depends(get_preference_service)):
            """Save the color theme (light or dark) to every preference backend."""
            try:
                return service.set_theme(update.theme)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error saving theme preference")
