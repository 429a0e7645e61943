from datetime import datetime, timedelta, timezone, UTC

import pytest

from bluemoon.utils.periods import as_utc, current_month_window, end_of_day, month_window


def test_month_window_covers_whole_month():
    start, end = month_window(2024, 2)
    assert start == datetime(2024, 2, 1, tzinfo=UTC)
    assert end == datetime(2024, 2, 29, 23, 59, 59, 999999, tzinfo=UTC)


def test_month_window_december():
    start, end = month_window(2023, 12)
    assert start.month == 12 and end.day == 31
    assert end + timedelta(microseconds=1) == datetime(2024, 1, 1, tzinfo=UTC)


def test_month_window_rejects_bad_month():
    with pytest.raises(ValueError):
        month_window(2024, 13)


def test_current_month_window_uses_given_now():
    start, end = current_month_window(datetime(2025, 6, 6, 10, 30, tzinfo=UTC))
    assert (start.year, start.month, start.day) == (2025, 6, 1)
    assert (end.month, end.day) == (6, 30)


def test_end_of_day_keeps_date_and_zone():
    value = end_of_day(datetime(2024, 3, 5, 8, 0, tzinfo=UTC))
    assert value == datetime(2024, 3, 5, 23, 59, 59, 999999, tzinfo=UTC)


def test_as_utc_naive_and_offset():
    assert as_utc(datetime(2024, 1, 1, 12)) == datetime(2024, 1, 1, 12, tzinfo=UTC)
    plus_seven = timezone(timedelta(hours=7))
    assert as_utc(datetime(2024, 1, 1, 7, tzinfo=plus_seven)) == datetime(2024, 1, 1, 0, tzinfo=UTC)
