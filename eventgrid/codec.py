"""
Serialization of the base-event list.

The list is stored as one iCalendar document (VCALENDAR with one VEVENT
per base event), built and parsed with the icalendar library:

- all-day events carry a DATE start, timed events a floating DATE-TIME
- recurrence is an RRULE; custom intervals are FREQ=DAILY;INTERVAL=n and
  are tagged with X-EVENTGRID-RECURRENCE so that "custom every 1 day"
  survives the round trip
- the display color goes in COLOR

Reading never fails: a document that cannot be parsed yields no events
and a single VEVENT that cannot be decoded is skipped. A JSON array of
event objects (the format older builds kept in browser storage) is
accepted as well, and export_json writes that layout for older readers.
"""

import json
import sys
from datetime import datetime
from typing import Iterable, Optional

from icalendar import Calendar as ICalCalendar, Event as ICalEvent

from .model import (
    DEFAULT_COLOR, EVENT_COLORS, TIME_FORMAT,
    Event, EventDraft, Recurrence, build_event,
)

PRODID = '-//eventgrid//eventgrid//'
RECURRENCE_PROPERTY = 'X-EVENTGRID-RECURRENCE'

_FREQ_BY_RECURRENCE = {
    Recurrence.DAILY: 'DAILY',
    Recurrence.WEEKLY: 'WEEKLY',
    Recurrence.MONTHLY: 'MONTHLY',
    Recurrence.CUSTOM: 'DAILY',
}

_RECURRENCE_BY_FREQ = {
    'DAILY': Recurrence.DAILY,
    'WEEKLY': Recurrence.WEEKLY,
    'MONTHLY': Recurrence.MONTHLY,
}


def _debug_print(msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] CODEC: {msg}", file=sys.stderr)


# ==================== Writing ====================

def _event_to_component(event: Event) -> ICalEvent:
    component = ICalEvent()
    component.add('uid', event.id)
    component.add('summary', event.title)

    if event.time is None:
        component.add('dtstart', event.date)
    else:
        clock_time = datetime.strptime(event.time, TIME_FORMAT).time()
        component.add('dtstart', datetime.combine(event.date, clock_time))

    if event.description:
        component.add('description', event.description)
    component.add('color', event.color)

    if event.repeats:
        rrule = {'freq': _FREQ_BY_RECURRENCE[event.recurrence]}
        if event.recurrence is Recurrence.CUSTOM:
            rrule['interval'] = max(1, event.custom_interval)
        component.add('rrule', rrule)
        component.add(RECURRENCE_PROPERTY, event.recurrence.value)

    return component


def export_ics(events: Iterable[Event]) -> str:
    """Render base events as a VCALENDAR document."""
    vcal = ICalCalendar()
    vcal.add('prodid', PRODID)
    vcal.add('version', '2.0')
    for event in events:
        vcal.add_component(_event_to_component(event))
    return vcal.to_ical().decode('utf-8')


# ==================== Reading ====================

def _first(rrule, name: str, default=None):
    values = rrule.get(name)
    if not values:
        return default
    if isinstance(values, (list, tuple)):
        return values[0]
    return values


def _palette_color(value) -> str:
    color = str(value or DEFAULT_COLOR).upper()
    return color if color in EVENT_COLORS else DEFAULT_COLOR


def _recurrence_of(component) -> tuple[Recurrence, int]:
    rrule = component.get('RRULE')
    marker = component.get(RECURRENCE_PROPERTY)
    interval = 1
    if rrule:
        interval = int(_first(rrule, 'INTERVAL', 1))

    if marker:
        return Recurrence.parse(str(marker)), interval
    if not rrule:
        return Recurrence.NONE, 1

    freq = str(_first(rrule, 'FREQ', '')).upper()
    recurrence = _RECURRENCE_BY_FREQ.get(freq)
    if recurrence is None:
        _debug_print(f"Unsupported FREQ={freq} on {component.get('UID')}, importing as single event")
        return Recurrence.NONE, 1
    if recurrence is Recurrence.DAILY and interval > 1:
        return Recurrence.CUSTOM, interval
    return recurrence, interval


def _component_to_event(component) -> Event:
    uid = component.get('UID')
    if not uid:
        raise ValueError("VEVENT without UID")

    dtstart = component.get('DTSTART')
    if dtstart is None:
        raise ValueError(f"VEVENT {uid} has no DTSTART")
    start = dtstart.dt
    if isinstance(start, datetime):
        day, clock_time = start.date(), start.strftime(TIME_FORMAT)
    else:
        day, clock_time = start, None

    recurrence, interval = _recurrence_of(component)

    draft = EventDraft(
        title=str(component.get('SUMMARY') or ''),
        date=day,
        time=clock_time,
        description=str(component.get('DESCRIPTION') or ''),
        recurrence=recurrence,
        custom_interval=interval,
        color=_palette_color(component.get('COLOR')),
    )
    return build_event(str(uid), draft)


def import_ics(ical_text: str) -> list[Event]:
    """
    Parse a VCALENDAR document into base events.

    Raises:
        ValueError: if the document itself cannot be parsed. Individual
            VEVENTs that cannot be decoded are skipped.
    """
    vcal = ICalCalendar.from_ical(ical_text)
    events = []
    seen: set[str] = set()
    for component in vcal.walk('VEVENT'):
        try:
            event = _component_to_event(component)
        except (ValueError, TypeError) as e:
            _debug_print(f"Skipping unreadable VEVENT: {e}")
            continue
        if event.id in seen:
            _debug_print(f"Skipping duplicate UID {event.id}")
            continue
        seen.add(event.id)
        events.append(event)
    return events


def export_json(events: Iterable[Event]) -> str:
    """Serialize events as a JSON array in the older builds' field layout."""
    return json.dumps([event.to_dict() for event in events], ensure_ascii=False)


def _import_json(text: str) -> list[Event]:
    events = []
    seen: set[str] = set()
    for item in json.loads(text):
        try:
            event = build_event(str(item['id']), EventDraft(
                title=item.get('title', ''),
                date=item['date'],
                time=item.get('time'),
                description=item.get('description') or '',
                recurrence=item.get('recurrence'),
                custom_interval=item.get('customInterval', 1),
                color=_palette_color(item.get('color')),
            ))
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            _debug_print(f"Skipping unreadable stored event: {e}")
            continue
        if event.id not in seen:
            seen.add(event.id)
            events.append(event)
    return events


# ==================== Store Format ====================

def dumps_events(events: Iterable[Event]) -> str:
    return export_ics(events)


def loads_events(text: Optional[str]) -> list[Event]:
    """
    Decode a stored value back into base events.

    Malformed input is treated as "no events" rather than an error.
    """
    if not text or not text.strip():
        return []
    try:
        if text.lstrip().startswith('['):
            return _import_json(text)
        return import_ics(text)
    except Exception as e:
        _debug_print(f"Stored event list is unreadable, starting empty: {e}")
        return []
