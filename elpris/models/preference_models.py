"""
Preference models.
"""

from typing import Optional

from pydantic import BaseModel


class Preferences(BaseModel):
    """Model for the stored user preferences."""
    region: str
    theme: Optional[str] = None  # None follows the system color scheme


class RegionUpdate(BaseModel):
    region: str


class ThemeUpdate(BaseModel):
    theme: str


class PreferenceUpdateResponse(BaseModel):
    """Model for the result of a preference write."""
    key: str
    value: str
    backends_written: int
    backends_total: int
