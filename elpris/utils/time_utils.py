"""
Stockholm wall-clock helpers.

Price documents are published per Swedish market day, so hour and day
boundaries are always computed in Europe/Stockholm.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

import pytz

SWEDEN_TIMEZONE = "Europe/Stockholm"


def get_timezone(name: Optional[str] = None):
    return pytz.timezone(name or SWEDEN_TIMEZONE)


def localize(value: datetime, tz=None) -> datetime:
    """Attach tz to a naive datetime, or convert an aware one into tz."""
    tz = tz or get_timezone()
    if value.tzinfo is None:
        return tz.localize(value)
    return value.astimezone(tz)


def now_local(tz=None) -> datetime:
    return datetime.now(tz or get_timezone())


def hour_start(value: datetime) -> datetime:
    # DST shifts happen on whole hours, so the offset of value is still valid.
    return value.replace(minute=0, second=0, microsecond=0)


def day_start(day: date, tz=None) -> datetime:
    tz = tz or get_timezone()
    return tz.localize(datetime.combine(day, time()))


def next_day_start(value: datetime, tz=None) -> datetime:
    return day_start(value.date() + timedelta(days=1), tz)


def to_epoch_ms(value: datetime) -> int:
    return int(round(value.timestamp() * 1000))


def parse_iso(time_start: str, tz=None) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as Stockholm time."""
    parsed = datetime.fromisoformat(time_start.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = (tz or get_timezone()).localize(parsed)
    return parsed


def parse_timestamp_ms(time_start: str, tz=None) -> int:
    return to_epoch_ms(parse_iso(time_start, tz))


def is_on_the_hour(time_start: str) -> bool:
    parsed = parse_iso(time_start)
    return parsed.minute == 0 and parsed.second == 0


def format_time_label(timestamp_ms: int, tz=None) -> str:
    """Format epoch milliseconds as HH:MM in local time."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz or get_timezone()).strftime("%H:%M")
