"""
Controllers package for API endpoint handlers.
Imports all controllers for easy access.
"""

from fastapi import APIRouter

# Base controller
from .base_controller import BaseController

# Individual controllers
from .info_controller import InfoController, get_refresh_service
from .price_controller import PriceController
from .preference_controller import PreferenceController, get_preference_service


class ElprisController:
    """
    Aggregate controller that combines all dashboard controllers.
    """

    def __init__(self):
        """Initialize aggregate controller with all sub-controllers."""
        self.router = APIRouter()

        self.info_controller = InfoController()
        self.price_controller = PriceController()
        self.preference_controller = PreferenceController()

        self._setup_aggregate_routes()

    def _setup_aggregate_routes(self):
        """Setup aggregate routes by including all controller routers."""
        self.router.include_router(self.info_controller.router)
        self.router.include_router(self.price_controller.router)
        self.router.include_router(self.preference_controller.router)


# Create aggregate controller
elpris_controller = ElprisController()

__all__ = [
    # Base controller
    "BaseController",

    # Individual controllers
    "InfoController",
    "PriceController",
    "PreferenceController",

    # Aggregate controller
    "ElprisController",
    "elpris_controller",

    # Dependencies
    "get_refresh_service",
    "get_preference_service"
]
