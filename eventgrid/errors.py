"""
Exceptions raised by the eventgrid engine.

Conflicts are not exceptions: they are returned to the caller as a
Conflict result (see model.py) so the UI can show them and replay the
operation with force=True.
"""


class EventGridError(Exception):
    """Base class for all engine errors."""


class ValidationError(EventGridError, ValueError):
    """An event draft was rejected. The store is left unchanged."""


class NotFoundError(EventGridError, LookupError):
    """An operation referenced an event id that is not in the store."""

    def __init__(self, event_id: str):
        super().__init__(f"No event with id {event_id!r}")
        self.event_id = event_id
