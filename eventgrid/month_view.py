"""
Month view model.

Combines the grid dates with the expanded occurrences into one cell per
grid date, ready for a rendering layer: which cells are outside the
displayed month, which one is today, and which occurrences fit in the
cell before an "+N more" overflow.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from . import clock
from .grid import grid_for
from .model import Occurrence
from .search import matches

DEFAULT_MAX_VISIBLE = 3


@dataclass
class MonthCell:
    date: date
    in_month: bool
    is_today: bool
    occurrences: list[Occurrence] = field(default_factory=list)
    max_visible: int = DEFAULT_MAX_VISIBLE

    @property
    def visible(self) -> list[Occurrence]:
        return self.occurrences[:self.max_visible]

    @property
    def overflow(self) -> int:
        """Number of occurrences hidden behind the visible ones."""
        return max(0, len(self.occurrences) - self.max_visible)


def display_order(occurrence: Occurrence) -> tuple:
    """All-day occurrences first, then by time, then by title."""
    return (occurrence.time is not None, occurrence.time or "", occurrence.title.lower())


def month_view(
    year: int,
    month: int,
    occurrences: Iterable[Occurrence],
    today: Optional[date] = None,
    search_term: str = "",
    max_visible: int = DEFAULT_MAX_VISIBLE,
) -> list[MonthCell]:
    """
    Build the 42 cells of a month view.

    Args:
        year, month: Displayed month (month is 1-based)
        occurrences: Fully expanded occurrence set
        today: Date to flag as today; defaults to the local clock
        search_term: Only occurrences matching this text are placed in cells
        max_visible: How many occurrences a cell shows before overflowing
    """
    if today is None:
        today = clock.today()

    by_date: dict[date, list[Occurrence]] = defaultdict(list)
    for occ in occurrences:
        if matches(occ, search_term):
            by_date[occ.date].append(occ)

    cells = []
    for cell_date in grid_for(year, month):
        cells.append(MonthCell(
            date=cell_date,
            in_month=cell_date.month == month,
            is_today=cell_date == today,
            occurrences=sorted(by_date.get(cell_date, []), key=display_order),
            max_visible=max_visible,
        ))
    return cells
