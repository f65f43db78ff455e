"""Tests for eventgrid/month_view.py"""

from datetime import date

from eventgrid.model import EventDraft, build_event
from eventgrid.month_view import month_view
from eventgrid.recurrence import expand_all


def events():
    return [
        build_event("standup", EventDraft(title="Standup", date="2024-02-01", time="09:00", recurrence="daily")),
        build_event("lunch", EventDraft(title="Lunch", date="2024-02-05", time="12:00")),
        build_event("holiday", EventDraft(title="Holiday", date="2024-02-05", description="Rose Monday")),
        build_event("dentist", EventDraft(title="Dentist", date="2024-02-05", time="08:00")),
        build_event("gym", EventDraft(title="Gym", date="2024-02-05", time="18:00")),
    ]


class TestMonthView:
    """Tests for month view cells."""

    def test_flags_cells_outside_month(self):
        cells = month_view(2024, 2, [], today=date(2024, 2, 14))

        assert len(cells) == 42
        assert cells[0].date == date(2024, 1, 28)
        assert [c.in_month for c in cells[:4]] == [False, False, False, False]
        assert cells[4].date == date(2024, 2, 1) and cells[4].in_month
        assert cells[-1].date == date(2024, 3, 9) and not cells[-1].in_month

    def test_flags_today(self):
        cells = month_view(2024, 2, [], today=date(2024, 2, 14))
        assert [c.date for c in cells if c.is_today] == [date(2024, 2, 14)]

    def test_orders_all_day_first_then_by_time(self):
        occurrences = expand_all(events(), date(2024, 2, 29))
        cell = next(c for c in month_view(2024, 2, occurrences, today=date(2024, 2, 1)) if c.date == date(2024, 2, 5))

        assert [o.title for o in cell.occurrences] == ["Holiday", "Dentist", "Standup", "Lunch", "Gym"]
        assert [o.title for o in cell.visible] == ["Holiday", "Dentist", "Standup"]
        assert cell.overflow == 2

    def test_search_filters_cells(self):
        occurrences = expand_all(events(), date(2024, 2, 29))
        cells = month_view(2024, 2, occurrences, today=date(2024, 2, 1), search_term="rose")

        populated = [c for c in cells if c.occurrences]
        assert [c.date for c in populated] == [date(2024, 2, 5)]
        assert [o.title for o in populated[0].occurrences] == ["Holiday"]

    def test_recurring_occurrences_fill_every_day(self):
        occurrences = expand_all(events()[:1], date(2024, 3, 31))
        cells = month_view(2024, 2, occurrences, today=date(2024, 2, 1))

        filled = [c.date for c in cells if c.occurrences]
        assert filled[0] == date(2024, 2, 1)
        assert filled[-1] == date(2024, 3, 9)
        assert len(filled) == 38
