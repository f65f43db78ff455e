"""
Conflict detection.

Two occurrences collide when they share a date and a time slot. An
absent time is a slot of its own, so all-day events on the same date
collide with each other. The occurrence being edited or moved is
excluded by its key.
"""

from typing import Iterable, Optional, Union

from .model import BaseKey, Occurrence, OccurrenceKey


def _slot(candidate) -> tuple:
    return (candidate.date, candidate.time or None)


def _exclude_key(exclude: Union[OccurrenceKey, str, None]) -> Optional[OccurrenceKey]:
    # Plain string ids name base events
    if isinstance(exclude, str):
        return BaseKey(exclude)
    return exclude


def collides(a, b) -> bool:
    """True if a and b occupy the same date/time slot."""
    return _slot(a) == _slot(b)


def find_conflicts(
    candidate,
    occurrences: Iterable[Occurrence],
    exclude: Union[OccurrenceKey, str, None] = None,
) -> list[Occurrence]:
    """
    Find every occurrence that occupies the candidate's slot.

    Args:
        candidate: Anything with a date and an optional HH:MM time
            (Event, Occurrence)
        occurrences: The fully expanded occurrence set to check against
        exclude: Key (or base event id) of the occurrence being edited

    Returns:
        Colliding occurrences, in the order they were given.
    """
    skip = _exclude_key(exclude)
    slot = _slot(candidate)
    return [
        occ for occ in occurrences
        if occ.key != skip and _slot(occ) == slot
    ]
