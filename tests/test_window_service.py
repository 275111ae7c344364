"""Tests for box and chart window selection."""

from datetime import datetime, timedelta

import pytest

from conftest import STOCKHOLM, TODAY, make_day, stockholm
from elpris.models import WindowAnchor
from elpris.services import PriceNormalizer, select_windows

TOMORROW = TODAY + timedelta(days=1)


def normalized(raw):
    return PriceNormalizer(tz=STOCKHOLM).normalize(raw, region="SE3", now=stockholm(2025, 1, 15, 12))


@pytest.fixture
def today() -> list:
    return normalized(make_day(TODAY))


@pytest.fixture
def two_days() -> list:
    return normalized(make_day(TODAY) + make_day(TOMORROW))


def hours(window) -> list:
    return [(r.time_start[:10], int(r.time_start[11:13])) for r in window]


class TestExactMatch:
    """Windows anchored at the current hour."""

    def test_morning_windows(self, today) -> None:
        selection = select_windows(today, stockholm(2025, 1, 15, 8), tz=STOCKHOLM)

        assert selection.anchor == WindowAnchor.CURRENT_HOUR
        assert selection.box_window == today[8:16]
        assert selection.chart_window == today[8:24]
        assert len(selection.chart_window) == 16
        assert selection.limited_data is False

    def test_minutes_past_the_hour_still_match(self, today) -> None:
        selection = select_windows(today, stockholm(2025, 1, 15, 8, 59), tz=STOCKHOLM)

        assert selection.box_window[0] == today[8]

    def test_short_windows_are_flagged(self, today) -> None:
        selection = select_windows(today, stockholm(2025, 1, 15, 20), tz=STOCKHOLM)

        assert len(selection.box_window) == 4
        assert len(selection.chart_window) == 4
        assert selection.limited_data is True

    def test_custom_sizes(self, today) -> None:
        selection = select_windows(today, stockholm(2025, 1, 15, 0), box_size=4, chart_size=6, tz=STOCKHOLM)

        assert len(selection.box_window) == 4
        assert len(selection.chart_window) == 6


class TestMidnightRollover:
    """Windows that continue into tomorrow's prices."""

    def test_box_window_at_23(self, two_days) -> None:
        selection = select_windows(two_days, stockholm(2025, 1, 15, 23), tz=STOCKHOLM)

        box_days = [day for day, _ in hours(selection.box_window)]
        assert len(selection.box_window) == 8
        assert box_days.count("2025-01-15") == 1
        assert box_days.count("2025-01-16") == 7
        assert hours(selection.box_window)[1] == ("2025-01-16", 0)

    def test_chart_window_at_22(self, two_days) -> None:
        selection = select_windows(two_days, stockholm(2025, 1, 15, 22, 15), tz=STOCKHOLM)

        chart_days = [day for day, _ in hours(selection.chart_window)]
        assert len(selection.chart_window) == 16
        assert chart_days.count("2025-01-15") == 2
        assert chart_days.count("2025-01-16") == 14
        assert selection.limited_data is False

    def test_top_up_from_tomorrow_when_window_is_short(self) -> None:
        # Today's late hours and tomorrow's hours arrive as separate, non-adjacent slices
        records = normalized(make_day(TODAY)[23:] + make_day(TOMORROW))

        selection = select_windows(records, stockholm(2025, 1, 15, 23), tz=STOCKHOLM)

        assert len(selection.box_window) == 8
        assert [r.timestamp for r in selection.box_window] == sorted(r.timestamp for r in selection.box_window)

    def test_missing_tomorrow_gives_limited_data(self, today) -> None:
        selection = select_windows(today, stockholm(2025, 1, 15, 23), tz=STOCKHOLM)

        assert selection.anchor == WindowAnchor.CURRENT_HOUR
        assert len(selection.box_window) == 1
        assert selection.limited_data is True

    def test_no_duplicates_after_rollover(self, two_days) -> None:
        selection = select_windows(two_days, stockholm(2025, 1, 15, 22), tz=STOCKHOLM)

        timestamps = [r.timestamp for r in selection.chart_window]
        assert len(timestamps) == len(set(timestamps))
        assert timestamps == sorted(timestamps)


class TestFallbacks:
    """Windows when the current hour is missing."""

    def test_next_available_hour(self, today) -> None:
        gapped = today[:10] + today[11:]

        selection = select_windows(gapped, stockholm(2025, 1, 15, 10, 15), tz=STOCKHOLM)

        assert selection.anchor == WindowAnchor.NEXT_AVAILABLE
        assert selection.box_window[0] == today[11]

    def test_future_data_only(self) -> None:
        records = normalized(make_day(TOMORROW))

        selection = select_windows(records, stockholm(2025, 1, 15, 14), tz=STOCKHOLM)

        assert selection.anchor == WindowAnchor.NEXT_AVAILABLE
        assert hours(selection.box_window)[0] == ("2025-01-16", 0)

    def test_all_data_in_the_past(self, today) -> None:
        selection = select_windows(today, stockholm(2025, 1, 17, 12), tz=STOCKHOLM)

        assert selection.anchor == WindowAnchor.MOST_RECENT_PAST
        assert len(selection.box_window) == 8
        assert len(selection.chart_window) == 16
        assert selection.box_window == today[0:8]

    def test_no_records(self) -> None:
        selection = select_windows([], stockholm(2025, 1, 15, 8), tz=STOCKHOLM)

        assert selection.anchor == WindowAnchor.NONE
        assert selection.box_window == []
        assert selection.chart_window == []
        assert selection.is_empty
        assert selection.limited_data


class TestPurity:
    """select_windows depends only on its inputs."""

    def test_repeated_calls_are_identical(self, two_days) -> None:
        now = stockholm(2025, 1, 15, 23)

        first = select_windows(two_days, now, tz=STOCKHOLM)
        second = select_windows(two_days, now, tz=STOCKHOLM)

        assert first == second

    def test_unsorted_input_is_sorted(self, today) -> None:
        shuffled = list(reversed(today))

        selection = select_windows(shuffled, stockholm(2025, 1, 15, 8), tz=STOCKHOLM)

        assert selection.box_window == today[8:16]
        assert shuffled[0] == today[-1]

    def test_naive_now_is_stockholm_time(self, today) -> None:
        selection = select_windows(today, datetime(2025, 1, 15, 8, 0), tz=STOCKHOLM)

        assert selection.box_window[0] == today[8]
