"""
Recurrence expansion.

Turns a base event with a recurrence rule into the occurrences that
follow it, up to and including a horizon date. The base date itself is
represented by the base event and is never emitted here.

Monthly series keep the base day-of-month and clamp it to the last day
of shorter months. Every step is computed from the base date, so a
series on the 31st goes Jan 31, Feb 29, Mar 31, Apr 30 and never drifts.
"""

from datetime import date, timedelta
from typing import Iterable, Iterator, Union

from dateutil.relativedelta import relativedelta

from . import clock
from .model import (
    Event, Occurrence, Recurrence,
    create_base_occurrence, create_derived_occurrence, parse_date,
)


def _nth_date(event: Event, n: int) -> date:
    """Date of the n-th step after the base date (n >= 1)."""
    rule = event.recurrence
    if rule is Recurrence.DAILY:
        return event.date + timedelta(days=n)
    if rule is Recurrence.WEEKLY:
        return event.date + timedelta(weeks=n)
    if rule is Recurrence.MONTHLY:
        return event.date + relativedelta(months=n)
    if rule is Recurrence.CUSTOM:
        return event.date + timedelta(days=n * max(1, event.custom_interval))
    raise ValueError(f"No stride for recurrence {rule!r}")


def occurrence_dates(event: Event, horizon: date) -> Iterator[date]:
    """Yield the dates of every derived occurrence of event up to horizon."""
    if event.recurrence is Recurrence.NONE:
        return
    n = 1
    while True:
        try:
            current = _nth_date(event, n)
        except (OverflowError, ValueError):
            return
        if current > horizon:
            return
        yield current
        n += 1


def _resolve_horizon(horizon: Union[date, str, None]) -> date:
    if horizon is None:
        return clock.default_horizon()
    return parse_date(horizon)


def expand(event: Event, horizon: Union[date, str, None] = None) -> Iterator[Occurrence]:
    """
    Lazily expand a recurring event into its derived occurrences.

    Args:
        event: The base event
        horizon: Last date to include; defaults to one year from today

    Returns:
        A fresh iterator on every call. Empty for non-recurring events.
    """
    until = _resolve_horizon(horizon)
    return (create_derived_occurrence(event, d) for d in occurrence_dates(event, until))


def expand_all(events: Iterable[Event], horizon: Union[date, str, None] = None) -> list[Occurrence]:
    """
    Every calendar-visible occurrence: each base event plus the expansion
    of every recurring one.
    """
    until = _resolve_horizon(horizon)
    events = list(events)
    occurrences = [create_base_occurrence(event) for event in events]
    for event in events:
        if event.repeats:
            occurrences.extend(expand(event, until))
    return occurrences
