"""
Drag-and-drop rescheduling.

Moving a base event changes its date in place. Moving one occurrence of
a recurring series materializes a standalone, non-recurring copy on the
target date and leaves the series alone. Either way the move is checked
for conflicts first and blocked unless forced.
"""

from datetime import date
from typing import Callable, Union

from .conflicts import find_conflicts
from .event_store import EventStore
from .model import Committed, Conflict, Occurrence, Recurrence, ScheduleResult, parse_date
from .recurrence import expand_all


class DragRescheduler:
    def __init__(self, store: EventStore, horizon: Callable[[], date]):
        self._store = store
        self._horizon = horizon

    def reschedule(
        self,
        occurrence: Occurrence,
        target_date: Union[date, str],
        force: bool = False,
    ) -> ScheduleResult:
        """
        Move an occurrence to target_date.

        Args:
            occurrence: The base or derived occurrence being dragged
            target_date: The date it was dropped on
            force: Apply the move even if the target slot is taken

        Returns:
            Committed with the updated or newly created event, or
            Conflict listing the occurrences in the way (nothing written).

        Raises:
            NotFoundError: if the occurrence's base event no longer exists
        """
        target = parse_date(target_date)

        # The series behind a derived occurrence must still exist
        base_id = occurrence.original_id if occurrence.is_recurring else occurrence.key.id
        base = self._store.get(base_id)

        if not force:
            occurrences = expand_all(self._store.list(), self._horizon())
            found = find_conflicts(occurrence.with_date(target), occurrences, exclude=occurrence.key)
            if found:
                return Conflict(tuple(found))

        if occurrence.is_recurring:
            event = self._store.create(base.to_draft(date=target, recurrence=Recurrence.NONE))
        else:
            event = self._store.update(base.id, base.to_draft(date=target))
        return Committed(event)
