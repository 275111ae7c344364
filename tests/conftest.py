"""Shared fixtures for dashboard tests."""

from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional

import pytest
import pytz

from elpris.exceptions import NetworkError
from elpris.repositories import BaseRepository

STOCKHOLM = pytz.timezone("Europe/Stockholm")
TODAY = date(2025, 1, 15)


def stockholm(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return STOCKHOLM.localize(datetime(year, month, day, hour, minute))


def make_day(day: date, prices: Optional[List[float]] = None, minutes: int = 60) -> List[Dict]:
    """Raw API records for one market day; prices are SEK/kWh."""
    step = timedelta(minutes=minutes)
    count = 24 * 60 // minutes
    prices = prices if prices is not None else [round((i + 1) / 10, 2) for i in range(count)]
    start = STOCKHOLM.localize(datetime(day.year, day.month, day.day))
    records = []
    for i, price in enumerate(prices):
        begin = STOCKHOLM.normalize(start + step * i)
        records.append({
            "SEK_per_kWh": price,
            "EUR_per_kWh": round(price / 11.5, 5),
            "EXR": 11.5,
            "time_start": begin.isoformat(),
            "time_end": STOCKHOLM.normalize(begin + step).isoformat(),
        })
    return records


class FakeRepository(BaseRepository):
    """Serves generated documents per day, optionally failing for some days."""

    def __init__(self, factory: Callable[[date], List[Dict]] = None, failing_days=()):
        self.factory = factory or (lambda day: make_day(day))
        self.failing_days = set(failing_days)
        self.calls = []

    def fetch_raw_prices(self, region, day):
        self.calls.append((region, day))
        if day in self.failing_days:
            raise NetworkError(f"no document for {day}")
        return self.factory(day)

    def check_accessibility(self, region="SE3", day=None):
        return True


@pytest.fixture
def today_records() -> List[Dict]:
    return make_day(TODAY)


@pytest.fixture
def two_day_records() -> List[Dict]:
    return make_day(TODAY) + make_day(TODAY + timedelta(days=1))


@pytest.fixture
def fake_repository() -> FakeRepository:
    return FakeRepository()
