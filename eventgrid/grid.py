"""
Month grid dates.

A month view is always 6 rows of 7 days, Sunday first. The first cell is
the Sunday on or before the 1st of the month, so the grid spills into
the previous and next months. Whether a cell belongs to the month is
left to the consumer (see month_view.py).
"""

from datetime import date, timedelta

GRID_ROWS = 6
GRID_COLUMNS = 7
GRID_DAYS = GRID_ROWS * GRID_COLUMNS


def grid_start(year: int, month: int) -> date:
    """The Sunday on or before the 1st of the month (month is 1-based)."""
    first_day = date(year, month, 1)
    # date.weekday(): Monday=0 .. Sunday=6
    start_offset = (first_day.weekday() + 1) % 7
    return first_day - timedelta(days=start_offset)


def grid_for(year: int, month: int) -> list[date]:
    """The 42 consecutive dates a month view renders, Sunday first."""
    start = grid_start(year, month)
    return [start + timedelta(days=i) for i in range(GRID_DAYS)]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move (year, month) by delta months, e.g. for prev/next navigation."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1
