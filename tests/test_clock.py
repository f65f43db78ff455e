"""Tests for eventgrid/clock.py"""

from datetime import date

import pytest
import pytz

from eventgrid import clock


@pytest.fixture(autouse=True)
def reset_timezone():
    yield
    clock.set_timezone(None)


class TestDefaultHorizon:
    def test_one_calendar_year(self):
        assert clock.default_horizon(start=date(2024, 3, 5)) == date(2025, 3, 5)

    def test_leap_day_clamps(self):
        assert clock.default_horizon(start=date(2024, 2, 29)) == date(2025, 2, 28)

    def test_explicit_days(self):
        assert clock.default_horizon(days=3, start=date(2024, 1, 1)) == date(2024, 1, 4)

    def test_defaults_to_today(self, monkeypatch):
        monkeypatch.setattr(clock, "today", lambda: date(2024, 1, 1))
        assert clock.default_horizon(days=10) == date(2024, 1, 11)


class TestTimezone:
    def test_configured_zone(self):
        clock.set_timezone("Asia/Tokyo")
        assert clock.get_local_timezone() == pytz.timezone("Asia/Tokyo")

    def test_unknown_zone_falls_back(self):
        clock.set_timezone("Not/AZone")
        assert clock.get_local_timezone() is not None
        assert isinstance(clock.today(), date)
