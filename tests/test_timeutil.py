from datetime import date

import pytest

from quickcourt.core.errors import InvalidRangeError, ValidationError
from quickcourt.services.timeutil import format_hhmm, in_window, iter_dates, parse_hhmm, parse_range


def test_parse_hhmm():
    assert parse_hhmm("06:00") == 360
    assert parse_hhmm("24:00") == 1440
    for bad in ("6:00", "24:30", "12:60", "-1:00", "10:-1", "+1:00", "noon", None):
        with pytest.raises(ValidationError):
            parse_hhmm(bad)


def test_format_hhmm():
    assert format_hhmm(0) == "00:00"
    assert format_hhmm(21 * 60 + 30) == "21:30"


def test_parse_range():
    assert parse_range("2026-11-02", "2026-11-02") == (date(2026, 11, 2), date(2026, 11, 2))
    with pytest.raises(InvalidRangeError):
        parse_range("2026-11-03", "2026-11-02")
    with pytest.raises(InvalidRangeError):
        parse_range("2026-11-01", "2026-11-10", max_days=5)


def test_iter_dates_crosses_month_end():
    days = list(iter_dates(date(2026, 10, 30), date(2026, 11, 2)))
    assert [d.isoformat() for d in days] == ["2026-10-30", "2026-10-31", "2026-11-01", "2026-11-02"]


def test_peak_window_wraps_midnight():
    assert in_window(18 * 60, 18 * 60, 20 * 60)
    assert not in_window(20 * 60, 18 * 60, 20 * 60)
    assert in_window(23 * 60, 22 * 60, 2 * 60)
    assert in_window(60, 22 * 60, 2 * 60)
    assert not in_window(3 * 60, 22 * 60, 2 * 60)
