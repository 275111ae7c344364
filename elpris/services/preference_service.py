"""
Service for user preferences (price area and color theme).
"""

from typing import Optional

from fastapi import HTTPException

from .base_service import BaseService
from ..config import VALID_REGIONS, VALID_THEMES, app_config, is_valid_region, is_valid_theme
from ..models import Preferences, PreferenceUpdateResponse
from ..repositories import PreferenceStore, create_preference_store

REGION_KEY = "selectedRegion"
THEME_KEY = "preferred-theme"


class PreferenceService(BaseService):
    """Service for reading and writing preferences through the layered store."""

    def __init__(self, repository: PreferenceStore = None, default_region: Optional[str] = None):
        """Initialize service with repository dependency injection."""
        super().__init__(repository or create_preference_store())
        self.default_region = default_region or app_config.preferences.default_region

    def validate_input(self, **kwargs) -> bool:
        """Validate preference values."""
        if "region" in kwargs and not is_valid_region(kwargs["region"]):
            raise HTTPException(
                status_code=400,
                detail=f"Region must be one of {', '.join(VALID_REGIONS)}"
            )

        if "theme" in kwargs and not is_valid_theme(kwargs["theme"]):
            raise HTTPException(
                status_code=400,
                detail=f"Theme must be one of {', '.join(VALID_THEMES)}"
            )

        return True

    def get_region(self) -> str:
        return self.repository.get(REGION_KEY, VALID_REGIONS) or self.default_region

    def get_theme(self) -> Optional[str]:
        """Stored theme, or None to follow the system color scheme."""
        return self.repository.get(THEME_KEY, VALID_THEMES)

    def get_preferences(self) -> Preferences:
        return Preferences(region=self.get_region(), theme=self.get_theme())

    def _save(self, key: str, value: str) -> PreferenceUpdateResponse:
        written = self.repository.set(key, value)
        total = len(self.repository.backends)
        if written < total:
            self.logger.warning(f"⚠️  Saved {key} to {written} of {total} preference backends")
        return PreferenceUpdateResponse(key=key, value=value, backends_written=written, backends_total=total)

    def set_region(self, region: str) -> PreferenceUpdateResponse:
        region = region.upper() if isinstance(region, str) else region
        self.validate_input(region=region)
        return self._save(REGION_KEY, region)

    def set_theme(self, theme: str) -> PreferenceUpdateResponse:
        theme = theme.lower() if isinstance(theme, str) else theme
        self.validate_input(theme=theme)
        return self._save(THEME_KEY, theme)
