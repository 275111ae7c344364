"""
This module creates and configures the main FastAPI application for the
Elpris dashboard API. It serves Swedish day-ahead electricity spot prices
shaped for an hourly price dashboard.

Tags:
    - fastapi
    - electricity-prices
    - dashboard
    - rest-api

Features:
    - Current-hour anchored price windows (8 tiles, 16-hour chart)
    - Midnight rollover into tomorrow's published prices
    - Low/medium/high price categorization and summary statistics
    - Layered preference storage for region and theme
    - Periodic background refresh
    - CORS-enabled for browser front ends

API Categories:
    - System Information: Health, regions, cache and upstream status
    - Price Data: Dashboard snapshots and forced refreshes
    - Preferences: Stored region and theme
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import ApplicationConfig, app_config, configure_logging
from .controllers import elpris_controller
from .services import lifespan


def create_app(config: Optional[ApplicationConfig] = None, background_refresh: bool = True) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration (defaults to the global app_config)
        background_refresh: Run the periodic refresh loop during the app lifespan

    Returns:
        FastAPI: Configured application instance.

    Routes:
        - /docs: Interactive Swagger UI documentation
        - /redoc: Alternative ReDoc documentation
        - /api/*: All dashboard endpoints
    """
    config = config or app_config
    configure_logging(config)

    app = FastAPI(
        title=config.api.title,
        description=config.api.description,
        version=config.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan if background_refresh else None,
        openapi_tags=[
            {
                "name": "System Information",
                "description": "API health, regions, cache statistics and upstream status"
            },
            {
                "name": "Price Data",
                "description": "Hourly price windows, chart series and statistics"
            },
            {
                "name": "Preferences",
                "description": "Stored price area and color theme"
            }
        ]
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.allow_origins,
        allow_credentials=config.api.allow_credentials,
        allow_methods=config.api.allow_methods,
        allow_headers=config.api.allow_headers,
    )

    app.include_router(
        elpris_controller.router,
        prefix="/api",
    )

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host=app_config.api.host,
        port=app_config.api.port,
        reload=app_config.api.reload
    )
