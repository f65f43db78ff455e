"""
eventgrid - event scheduling engine for a personal month calendar.

This package provides:
- Event model and occurrence identity (model.py)
- Recurrence expansion (recurrence.py)
- Conflict detection (conflicts.py)
- Month grid dates and month view cells (grid.py, month_view.py)
- Drag rescheduling (rescheduler.py)
- Event store with write-through persistence (event_store.py, storage.py, codec.py)
- Calendar service facade (calendar_service.py)
"""

from .errors import EventGridError, ValidationError, NotFoundError
from .model import (
    EVENT_COLORS, Recurrence, Event, EventDraft, Occurrence,
    BaseKey, DerivedKey, Committed, Conflict,
)
from .config import Config
from .storage import KeyValueStore, MemoryKeyValueStore, JsonFileKeyValueStore
from .event_store import EventStore
from .recurrence import expand, expand_all
from .conflicts import find_conflicts
from .grid import grid_for, shift_month
from .month_view import MonthCell, month_view
from .rescheduler import DragRescheduler
from .calendar_service import CalendarService, open_calendar

__all__ = [
    'EventGridError',
    'ValidationError',
    'NotFoundError',
    'EVENT_COLORS',
    'Recurrence',
    'Event',
    'EventDraft',
    'Occurrence',
    'BaseKey',
    'DerivedKey',
    'Committed',
    'Conflict',
    'Config',
    'KeyValueStore',
    'MemoryKeyValueStore',
    'JsonFileKeyValueStore',
    'EventStore',
    'expand',
    'expand_all',
    'find_conflicts',
    'grid_for',
    'shift_month',
    'MonthCell',
    'month_view',
    'DragRescheduler',
    'CalendarService',
    'open_calendar',
]
