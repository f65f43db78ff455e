"""Shared test fixtures for eventgrid tests.

This module provides common fixtures used across all test modules:
- In-memory key-value storage
- An EventStore and CalendarService wired to it with a fixed horizon
- Draft factories for the events used throughout the tests
"""

from datetime import date

import pytest

from eventgrid.calendar_service import CalendarService
from eventgrid.event_store import EventStore
from eventgrid.model import EventDraft, Recurrence
from eventgrid.storage import MemoryKeyValueStore


# ─────────────────────────────────────────────────────────────────────────────
# Constants
# ─────────────────────────────────────────────────────────────────────────────

HORIZON = date(2024, 1, 10)


# ─────────────────────────────────────────────────────────────────────────────
# Storage Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def memory_storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def store(memory_storage) -> EventStore:
    return EventStore(memory_storage)


@pytest.fixture
def service(store) -> CalendarService:
    """Calendar service expanding recurring events up to HORIZON."""
    return CalendarService(store, horizon=HORIZON)


# ─────────────────────────────────────────────────────────────────────────────
# Draft Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def standup_draft() -> EventDraft:
    return EventDraft(
        title="Standup",
        date="2024-01-01",
        time="09:00",
        recurrence=Recurrence.DAILY,
    )


@pytest.fixture
def meeting_draft() -> EventDraft:
    return EventDraft(title="Planning", date="2024-01-05", time="14:00")
