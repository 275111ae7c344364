"""
Base controller interface for API endpoints.

This module provides the abstract base class for all API controllers of the
dashboard service. It enforces consistent patterns and provides common
functionality across all endpoint handlers.

Tags:
    - base-controller
    - abstract-interface
    - error-handling

Architecture:
    All controllers inherit from BaseController and must implement:
    - _setup_routes(): Define endpoint routes and handlers
    - Optional: Custom validation and error handling

Usage:
    ```python
    class MyController(BaseController):
        def _setup_routes(self):
            @self.router.get("/my-endpoint")
            async def my_endpoint():
                return {"message": "Hej"}
    ```
"""

from abc import ABC, abstractmethod
from typing import Optional

from fastapi import APIRouter, HTTPException

from ..exceptions import NetworkError, InvalidFormatError


class BaseController(ABC):
    """
    Abstract base controller for consistent API endpoint patterns.

    This class provides the foundation for all API controllers with:
    - Standardized FastAPI router setup
    - Exception handling with contextual error messages

    Attributes:
        router (APIRouter): FastAPI router instance for endpoint registration
    """

    def __init__(self):
        """
        Initialize controller with FastAPI router.

        Creates a new APIRouter instance and calls _setup_routes() to register
        all endpoint handlers defined by the concrete controller implementation.
        """
        self.router = APIRouter()
        self._setup_routes()

    @abstractmethod
    def _setup_routes(self):
        """
        Setup routes for this controller.

        This abstract method must be implemented by all concrete controllers
        to define their specific API endpoints using the self.router instance.
        """
        pass

    def handle_exception(self, e: Exception, context: Optional[str] = None) -> None:
        """
        Handle exceptions consistently across all controllers.

        Upstream fetch failures become HTTP 502, everything else HTTP 500.

        Args:
            e (Exception): The exception that occurred
            context (Optional[str]): Additional context about where the error occurred

        Raises:
            HTTPException: Always
        """
        error_message = f"{context}: {str(e)}" if context else str(e)
        status_code = 502 if isinstance(e, (NetworkError, InvalidFormatError)) else 500
        raise HTTPException(status_code=status_code, detail=error_message)
