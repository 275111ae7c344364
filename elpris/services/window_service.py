"""
Selection of the box (compact tiles) and chart windows.

Anchoring rules, in order:
    1. the record for the current hour
    2. the first record at or after the next hour
    3. the first record before the current hour (stale data beats no data)
    4. nothing: two empty windows

From the midnight preparation hour on, a window anchored at the current
hour is topped up with the next day's records when it comes up short.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from ..models import NormalizedPriceRecord, WindowAnchor, WindowSelection
from ..utils import get_timezone, hour_start, localize, next_day_start, to_epoch_ms

logger = logging.getLogger(__name__)

HOUR_MS = 60 * 60 * 1000


def _find_index(records: Sequence[NormalizedPriceRecord],
                predicate: Callable[[NormalizedPriceRecord], bool]) -> Optional[int]:
    for index, record in enumerate(records):
        if predicate(record):
            return index
    return None


def _top_up(window: List[NormalizedPriceRecord], tomorrow: Sequence[NormalizedPriceRecord],
            target: int) -> List[NormalizedPriceRecord]:
    """Append tomorrow's records that follow the window until it reaches target."""
    missing = target - len(window)
    if missing <= 0:
        return window
    last_timestamp = window[-1].timestamp if window else None
    candidates = [r for r in tomorrow if last_timestamp is None or r.timestamp > last_timestamp]
    return window + candidates[:missing]


def select_windows(records: Sequence[NormalizedPriceRecord], now: datetime, box_size: int = 8,
                   chart_size: int = 16, midnight_prep_hour: int = 22, tz=None) -> WindowSelection:
    """Select the box and chart windows for the instant now.

    Pure in (records, now); a naive now is taken as Stockholm time. Windows
    may be shorter than their targets, which the result reports through
    limited_data.
    """
    tz = tz or get_timezone()
    now = localize(now, tz)
    sorted_records = sorted(records, key=lambda r: r.timestamp)

    if not sorted_records:
        logger.warning("No valid price data found for any time period")
        return WindowSelection(anchor=WindowAnchor.NONE, box_size=box_size, chart_size=chart_size)

    current_timestamp = to_epoch_ms(hour_start(now))
    next_hour_timestamp = current_timestamp + HOUR_MS
    tomorrow_start = to_epoch_ms(next_day_start(now, tz))
    near_midnight = now.hour >= midnight_prep_hour

    tomorrow_records = [r for r in sorted_records if r.timestamp >= tomorrow_start]
    if near_midnight:
        if tomorrow_records:
            logger.info(f"Found {len(tomorrow_records)} hours of tomorrow's data")
        else:
            logger.warning("No tomorrow's data available near midnight")

    index = _find_index(sorted_records, lambda r: r.timestamp == current_timestamp)
    if index is not None:
        anchor = WindowAnchor.CURRENT_HOUR
        box_window = sorted_records[index:index + box_size]
        chart_window = sorted_records[index:index + chart_size]
        if near_midnight:
            box_window = _top_up(box_window, tomorrow_records, box_size)
            chart_window = _top_up(chart_window, tomorrow_records, chart_size)
    else:
        index = _find_index(sorted_records, lambda r: r.timestamp >= next_hour_timestamp)
        anchor = WindowAnchor.NEXT_AVAILABLE
        if index is None:
            index = _find_index(sorted_records, lambda r: r.timestamp < current_timestamp)
            anchor = WindowAnchor.MOST_RECENT_PAST
        if index is None:
            logger.warning("No valid price data found for any time period")
            return WindowSelection(anchor=WindowAnchor.NONE, box_size=box_size, chart_size=chart_size)
        box_window = sorted_records[index:index + box_size]
        chart_window = sorted_records[index:index + chart_size]

    logger.info(f"Using {anchor.value.replace('_', ' ')} prices")

    if len(box_window) < box_size:
        logger.warning(f"Could only get {len(box_window)} hours of price data for boxes")
    if len(chart_window) < chart_size:
        logger.warning(f"Could only get {len(chart_window)} hours of price data for chart")

    return WindowSelection(
        box_window=box_window,
        chart_window=chart_window,
        anchor=anchor,
        box_size=box_size,
        chart_size=chart_size,
    )
