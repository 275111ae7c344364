"""
Domain models for spot price data.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PriceCategory(str, Enum):
    """Tertile position of a price within a window's range."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class WindowAnchor(str, Enum):
    """Which rule picked the first record of a window."""
    CURRENT_HOUR = "current_hour"
    NEXT_AVAILABLE = "next_available"
    MOST_RECENT_PAST = "most_recent_past"
    NONE = "none"


class RawPriceRecord(BaseModel):
    """Model for one hourly record as published by the price API."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    time_start: str
    sek_per_kwh: float = Field(alias="SEK_per_kWh")  # SEK per kWh
    eur_per_kwh: Optional[float] = Field(default=None, alias="EUR_per_kWh")
    exchange_rate: Optional[float] = Field(default=None, alias="EXR")
    time_end: Optional[str] = None


class NormalizedPriceRecord(RawPriceRecord):
    """Raw record plus derived epoch timestamp and display price."""
    timestamp: int  # epoch milliseconds
    display_price: float  # öre per kWh, 2 decimals


class WindowSelection(BaseModel):
    """Box and chart windows chosen for a given instant."""
    box_window: List[NormalizedPriceRecord] = []
    chart_window: List[NormalizedPriceRecord] = []
    anchor: WindowAnchor = WindowAnchor.NONE
    box_size: int = 8
    chart_size: int = 16

    @property
    def limited_data(self) -> bool:
        return len(self.box_window) < self.box_size or len(self.chart_window) < self.chart_size

    @property
    def is_empty(self) -> bool:
        return not self.box_window and not self.chart_window
