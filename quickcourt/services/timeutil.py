"""
Calendar and clock helpers shared by the slot services.

Dates travel as ISO strings (YYYY-MM-DD) and times of day as HH:MM strings,
the same shape they are stored in. Times are handled as minutes past
midnight; "24:00" is accepted as a closing time.
"""
from datetime import date, timedelta
from typing import Iterator, Tuple

from quickcourt.core.errors import InvalidRangeError, ValidationError

MINUTES_PER_DAY = 1440


def parse_hhmm(value: str, field: str = "time") -> int:
    try:
        hh, mm = value.strip().split(":")
        if len(hh) != 2 or len(mm) != 2 or not (hh + mm).isdigit():
            raise ValueError(value)
        total = int(hh) * 60 + int(mm)
    except (AttributeError, ValueError):
        raise ValidationError(f"{field} must be HH:MM")
    if int(mm) > 59 or not 0 <= total <= MINUTES_PER_DAY:
        raise ValidationError(f"{field} must be HH:MM")
    return total


def format_hhmm(minutes: int) -> str:
    hh, mm = divmod(minutes, 60)
    return f"{hh:02d}:{mm:02d}"


def parse_date(value: str, field: str = "date") -> date:
    if not value:
        raise InvalidRangeError(f"{field} is required")
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        raise InvalidRangeError(f"{field} must be YYYY-MM-DD")


def parse_range(start_value: str, end_value: str, max_days: int | None = None) -> Tuple[date, date]:
    """Parse an inclusive [start, end] range; end may equal start but never precede it."""
    start = parse_date(start_value, "startDate")
    end = parse_date(end_value, "endDate")
    if end < start:
        raise InvalidRangeError("endDate must not be before startDate")
    if max_days is not None and (end - start).days + 1 > max_days:
        raise InvalidRangeError(f"date range may span at most {max_days} days")
    return start, end


def iter_dates(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def in_window(minute: int, window_start: int, window_end: int) -> bool:
    """Half-open [start, end) membership; a window with start > end wraps past midnight."""
    if window_start <= window_end:
        return window_start <= minute < window_end
    return minute >= window_start or minute < window_end
