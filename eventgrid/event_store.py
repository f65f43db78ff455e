"""
Event store for eventgrid.

Owns the canonical list of base events. Every mutation re-serializes the
whole list and writes it to the key-value backend before returning; the
in-memory list is only replaced once that write has succeeded, so a
failed write leaves the store exactly as it was.
"""

import sys
import uuid
from datetime import datetime
from typing import Optional

from .codec import dumps_events, loads_events
from .errors import NotFoundError
from .model import Event, EventDraft, build_event
from .storage import KeyValueStore


def _debug_print(msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] STORE: {msg}", file=sys.stderr)


class EventStore:
    """
    Canonical list of base events with write-through persistence.

    The list is read from the backend once, at construction. An
    unreadable or malformed stored value starts the store empty.
    """

    STORAGE_KEY = 'calendarEvents'

    def __init__(self, storage: KeyValueStore, key: str = STORAGE_KEY):
        self._storage = storage
        self._key = key
        self._events: list[Event] = self._load()

    # ==================== Persistence ====================

    def _load(self) -> list[Event]:
        try:
            raw = self._storage.read(self._key)
        except Exception as e:
            _debug_print(f"Could not read {self._key!r}, starting empty: {e}")
            return []
        events = loads_events(raw)
        _debug_print(f"Loaded {len(events)} events from {self._key!r}")
        return events

    def _commit(self, events: list[Event]) -> None:
        """Write the full list, then make it current."""
        self._storage.write(self._key, dumps_events(events))
        self._events = events

    # ==================== Queries ====================

    def find(self, event_id: str) -> Optional[Event]:
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def get(self, event_id: str) -> Event:
        """Get a base event by id; raises NotFoundError if absent."""
        event = self.find(event_id)
        if event is None:
            raise NotFoundError(event_id)
        return event

    def __contains__(self, event_id: str) -> bool:
        return self.find(event_id) is not None

    def __len__(self) -> int:
        return len(self._events)

    # ==================== CRUD Operations ====================

    def create(self, draft: EventDraft) -> Event:
        """
        Add a new event under a fresh id.

        Raises:
            ValidationError: if the draft's title is blank or a field is malformed
        """
        event = build_event(str(uuid.uuid4()), draft)
        self._commit(self._events + [event])
        _debug_print(f"Created {event.id} ({event.title!r} on {event.date})")
        return event

    def update(self, event_id: str, draft: EventDraft) -> Event:
        """
        Replace an event's fields, keeping its id.

        Raises:
            NotFoundError: if no event has this id
            ValidationError: if the draft is rejected
        """
        index = next((i for i, e in enumerate(self._events) if e.id == event_id), None)
        if index is None:
            raise NotFoundError(event_id)

        event = build_event(event_id, draft)
        events = list(self._events)
        events[index] = event
        self._commit(events)
        _debug_print(f"Updated {event_id}")
        return event

    def delete(self, event_id: str) -> None:
        """Remove an event. Deleting an unknown id is a no-op."""
        if event_id not in self:
            return
        self._commit([e for e in self._events if e.id != event_id])
        _debug_print(f"Deleted {event_id}")

    def list(self) -> list[Event]:
        """All base events (a copy; mutate through the store's methods)."""
        return list(self._events)
