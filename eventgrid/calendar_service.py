"""
Calendar service for eventgrid.

Single entry point for a UI layer: wires the EventStore to recurrence
expansion, conflict detection, the month grid and drag rescheduling.

Occurrences are recomputed from the store on every query. Create, edit
and drag all check for conflicts first; a blocked call returns a
Conflict and writes nothing, and the caller replays it with force=True
once the user has confirmed.
"""

from datetime import date
from typing import Optional, Union

from . import clock
from .config import Config
from .conflicts import find_conflicts
from .event_store import EventStore
from .grid import grid_for
from .model import (
    BaseKey, Committed, Conflict, Event, EventDraft, Occurrence,
    OccurrenceKey, ScheduleResult, build_event, parse_date,
)
from .month_view import MonthCell, month_view
from .recurrence import expand_all
from .rescheduler import DragRescheduler
from .search import filter_occurrences
from .storage import create_key_value_store


class CalendarService:
    """
    Facade over the scheduling engine.

    Args:
        store: The EventStore holding base events
        horizon: Fixed last expansion date; when None it moves with the
            local clock (today plus horizon_days, or plus one year)
        horizon_days: Expansion window in days when horizon is None
        max_visible_per_cell: Occurrences a month cell shows before overflow
    """

    def __init__(
        self,
        store: EventStore,
        horizon: Optional[date] = None,
        horizon_days: Optional[int] = None,
        max_visible_per_cell: int = 3,
    ):
        self.store = store
        self._horizon = horizon
        self._horizon_days = horizon_days
        self.max_visible_per_cell = max_visible_per_cell
        self._rescheduler = DragRescheduler(store, self.horizon)

    def horizon(self) -> date:
        if self._horizon is not None:
            return self._horizon
        return clock.default_horizon(self._horizon_days)

    # ==================== Queries ====================

    def events(self) -> list[Event]:
        return self.store.list()

    def all_occurrences(self) -> list[Occurrence]:
        """Base events plus every derived occurrence up to the horizon."""
        return expand_all(self.store.list(), self.horizon())

    def occurrences_on(self, day: Union[date, str]) -> list[Occurrence]:
        day = parse_date(day)
        return [occ for occ in self.all_occurrences() if occ.date == day]

    def search(self, term: str) -> list[Occurrence]:
        return filter_occurrences(self.all_occurrences(), term)

    def find_conflicts(
        self,
        candidate,
        exclude: Union[OccurrenceKey, str, None] = None,
    ) -> list[Occurrence]:
        return find_conflicts(candidate, self.all_occurrences(), exclude)

    def grid_for(self, year: int, month: int) -> list[date]:
        return grid_for(year, month)

    def month_view(
        self,
        year: int,
        month: int,
        search_term: str = "",
        today: Optional[date] = None,
    ) -> list[MonthCell]:
        return month_view(
            year, month, self.all_occurrences(),
            today=today,
            search_term=search_term,
            max_visible=self.max_visible_per_cell,
        )

    # ==================== Mutations ====================

    def create_event(self, draft: EventDraft, force: bool = False) -> ScheduleResult:
        """
        Create an event unless its slot is taken.

        Raises:
            ValidationError: if the draft is rejected (checked before conflicts)
        """
        # Validate before looking for conflicts; the id is replaced on create
        candidate = build_event("", draft)
        if not force:
            found = self.find_conflicts(candidate)
            if found:
                return Conflict(tuple(found))
        return Committed(self.store.create(draft))

    def update_event(self, event_id: str, draft: EventDraft, force: bool = False) -> ScheduleResult:
        """
        Edit an event unless its new slot is taken by another occurrence.

        Raises:
            NotFoundError: if no event has this id
            ValidationError: if the draft is rejected
        """
        self.store.get(event_id)
        candidate = build_event(event_id, draft)
        if not force:
            found = self.find_conflicts(candidate, exclude=BaseKey(event_id))
            if found:
                return Conflict(tuple(found))
        return Committed(self.store.update(event_id, draft))

    def delete_event(self, event_id: str) -> None:
        """Delete a base event; its derived occurrences disappear with it."""
        self.store.delete(event_id)

    def reschedule(
        self,
        occurrence: Occurrence,
        target_date: Union[date, str],
        force: bool = False,
    ) -> ScheduleResult:
        """Move a dragged occurrence to target_date (see DragRescheduler)."""
        return self._rescheduler.reschedule(occurrence, target_date, force=force)


def open_calendar(config: Optional[Config] = None) -> CalendarService:
    """Build a file-backed CalendarService from configuration."""
    if config is None:
        config = Config.load_or_default()
    clock.set_timezone(config.timezone)

    storage = create_key_value_store(config.storage.path)
    store = EventStore(storage, key=config.storage.key)
    return CalendarService(
        store,
        horizon_days=config.schedule.horizon_days,
        max_visible_per_cell=config.schedule.max_visible_per_cell,
    )
