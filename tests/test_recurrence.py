"""Tests for eventgrid/recurrence.py

Expansion emits one derived occurrence per stride strictly after the
base date, up to and including the horizon.
"""

from datetime import date, timedelta

import pytest

from eventgrid import clock
from eventgrid.model import EventDraft, Event, Recurrence, build_event
from eventgrid.recurrence import expand, expand_all


def make_event(recurrence, day="2024-01-01", time="09:00", interval=1, event_id="base"):
    return build_event(event_id, EventDraft(
        title="Series", date=day, time=time, recurrence=recurrence, custom_interval=interval,
    ))


def dates_of(occurrences):
    return [occ.date for occ in occurrences]


class TestStrides:
    """Tests for each recurrence rule."""

    def test_none_expands_to_nothing(self):
        event = make_event(Recurrence.NONE)
        assert list(expand(event, date(2030, 1, 1))) == []

    def test_daily_has_no_gaps(self):
        event = make_event(Recurrence.DAILY)
        result = dates_of(expand(event, date(2024, 3, 1)))

        expected = [date(2024, 1, 1) + timedelta(days=n) for n in range(1, 61)]
        assert result == expected

    def test_standup_scenario(self):
        """Daily 09:00 standup clipped to two days after the base date."""
        event = make_event(Recurrence.DAILY)
        occurrences = list(expand(event, date(2024, 1, 3)))

        assert dates_of(occurrences) == [date(2024, 1, 2), date(2024, 1, 3)]
        for occ in occurrences:
            assert occ.time == "09:00"
            assert occ.is_recurring is True
            assert occ.original_id == "base"

    def test_weekly(self):
        event = make_event(Recurrence.WEEKLY)
        assert dates_of(expand(event, date(2024, 1, 29))) == [
            date(2024, 1, 8), date(2024, 1, 15), date(2024, 1, 22), date(2024, 1, 29),
        ]

    def test_monthly_clamps_to_month_end(self):
        """A series on the 31st lands on the last day of shorter months."""
        event = make_event(Recurrence.MONTHLY, day="2024-01-31")
        assert dates_of(expand(event, date(2024, 5, 31))) == [
            date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30), date(2024, 5, 31),
        ]

    def test_monthly_does_not_drift_after_short_month(self):
        event = make_event(Recurrence.MONTHLY, day="2023-01-30")
        result = dates_of(expand(event, date(2023, 4, 30)))
        assert result == [date(2023, 2, 28), date(2023, 3, 30), date(2023, 4, 30)]

    def test_custom_interval(self):
        event = make_event(Recurrence.CUSTOM, interval=3)
        assert dates_of(expand(event, date(2024, 1, 10))) == [
            date(2024, 1, 4), date(2024, 1, 7), date(2024, 1, 10),
        ]

    def test_custom_non_positive_interval_steps_daily(self):
        event = Event(id="raw", title="Raw", date=date(2024, 1, 1),
                      recurrence=Recurrence.CUSTOM, custom_interval=-4)
        assert dates_of(expand(event, date(2024, 1, 3))) == [date(2024, 1, 2), date(2024, 1, 3)]


class TestHorizon:
    """Tests for where expansion stops."""

    def test_horizon_before_base_yields_nothing(self):
        event = make_event(Recurrence.DAILY, day="2024-06-01")
        assert list(expand(event, date(2024, 5, 1))) == []

    def test_horizon_on_base_yields_nothing(self):
        event = make_event(Recurrence.DAILY)
        assert list(expand(event, date(2024, 1, 1))) == []

    def test_accepts_string_horizon(self):
        event = make_event(Recurrence.DAILY)
        assert dates_of(expand(event, "2024-01-02")) == [date(2024, 1, 2)]

    def test_default_horizon_is_one_year_from_today(self, monkeypatch):
        monkeypatch.setattr(clock, "today", lambda: date(2024, 1, 1))
        event = make_event(Recurrence.DAILY)

        result = dates_of(expand(event))

        assert result[-1] == date(2025, 1, 1)
        assert len(result) == 366

    def test_expansion_is_restartable(self):
        """Each call recomputes the same sequence."""
        event = make_event(Recurrence.WEEKLY)
        first = list(expand(event, date(2024, 3, 1)))
        second = list(expand(event, date(2024, 3, 1)))
        assert first == second
        assert len(first) > 0

    def test_expansion_is_lazy(self):
        event = make_event(Recurrence.DAILY)
        iterator = expand(event, date(9999, 12, 31))
        assert next(iterator).date == date(2024, 1, 2)


class TestExpandAll:
    def test_includes_every_base_and_derived_occurrence(self):
        single = make_event(Recurrence.NONE, event_id="single")
        series = make_event(Recurrence.DAILY, event_id="series")

        occurrences = expand_all([single, series], date(2024, 1, 3))

        keys = [str(occ.key) for occ in occurrences]
        assert keys == ["single", "series", "series@2024-01-02", "series@2024-01-03"]

    @pytest.mark.parametrize("recurrence", list(Recurrence))
    def test_keys_are_unique(self, recurrence):
        event = make_event(recurrence)
        occurrences = expand_all([event], date(2024, 12, 31))
        keys = [occ.key for occ in occurrences]
        assert len(keys) == len(set(keys))
