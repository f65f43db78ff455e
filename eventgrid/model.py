"""
Event model for eventgrid.

Base events (Event) are plain records owned by the EventStore. An
Occurrence wraps a base event together with the date it falls on; it
delegates everything else to the wrapped event rather than duplicating
its fields. Occurrences are derived on every read and never stored.

Occurrence identity is structured: the base occurrence of an event is
keyed by BaseKey(id), every generated one by DerivedKey(base_id, date).
"""

import re
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from .errors import ValidationError


# Fixed display palette, first entry is the default
EVENT_COLORS = [
    '#3B82F6',  # Blue
    '#EF4444',  # Red
    '#10B981',  # Green
    '#F59E0B',  # Amber
    '#8B5CF6',  # Violet
    '#EC4899',  # Pink
    '#14B8A6',  # Teal
    '#F97316',  # Orange
]
DEFAULT_COLOR = EVENT_COLORS[0]

TIME_FORMAT = "%H:%M"
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class Recurrence(str, Enum):
    """Supported recurrence rules."""
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Union['Recurrence', str, None]) -> 'Recurrence':
        if isinstance(value, cls):
            return value
        if value is None or str(value).strip() == "":
            return cls.NONE
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(f"Unknown recurrence rule: {value!r}") from None


# ==================== Field Parsing ====================

def parse_date(value: Union[date, str]) -> date:
    """Parse a YYYY-MM-DD string (or pass through a date) into a naive date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not _DATE_PATTERN.fullmatch(text):
        raise ValidationError(f"Invalid calendar date: {value!r}")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid calendar date: {value!r}") from None


def parse_time(value: Optional[str]) -> Optional[str]:
    """
    Normalize an optional HH:MM string.

    None and blank strings mean "all-day" and come back as None.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.strptime(text, TIME_FORMAT).strftime(TIME_FORMAT)
    except ValueError:
        raise ValidationError(f"Invalid time of day: {value!r}") from None


def parse_color(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_COLOR
    color = str(value).strip().upper()
    if color not in EVENT_COLORS:
        raise ValidationError(f"Color {value!r} is not in the event palette")
    return color


def parse_interval(value) -> int:
    """Custom interval in days; non-positive values are treated as 1."""
    if value is None or value == "":
        return 1
    try:
        interval = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Custom interval must be a whole number of days: {value!r}") from None
    return max(1, interval)


# ==================== Events ====================

@dataclass
class EventDraft:
    """
    User-supplied event fields, not yet validated.

    This is what the form layer hands to create/update. Dates may be
    given as date objects or YYYY-MM-DD strings.
    """
    title: str
    date: Union[date, str]
    time: Optional[str] = None
    description: str = ""
    recurrence: Union[Recurrence, str] = Recurrence.NONE
    custom_interval: int = 1
    color: str = DEFAULT_COLOR


@dataclass(frozen=True)
class Event:
    """A base event as owned by the EventStore."""
    id: str
    title: str
    date: date
    time: Optional[str] = None
    description: str = ""
    recurrence: Recurrence = Recurrence.NONE
    custom_interval: int = 1
    color: str = DEFAULT_COLOR

    @property
    def all_day(self) -> bool:
        return self.time is None

    @property
    def repeats(self) -> bool:
        """True if this event is the head of a recurring series."""
        return self.recurrence is not Recurrence.NONE

    def to_draft(self, **changes) -> EventDraft:
        """Copy this event's fields into a draft, applying any overrides."""
        draft = EventDraft(
            title=self.title,
            date=self.date,
            time=self.time,
            description=self.description,
            recurrence=self.recurrence,
            custom_interval=self.custom_interval,
            color=self.color,
        )
        return replace(draft, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "time": self.time,
            "description": self.description,
            "recurrence": self.recurrence.value,
            "customInterval": self.custom_interval,
            "color": self.color,
        }

    def __repr__(self):
        return f"Event(id={self.id!r}, title={self.title!r}, date={self.date}, time={self.time!r})"


def build_event(event_id: str, draft: EventDraft) -> Event:
    """
    Validate a draft and turn it into an Event with the given id.

    Raises:
        ValidationError: if the title is blank or any field is malformed.
    """
    title = (draft.title or "").strip()
    if not title:
        raise ValidationError("Event title must not be empty")

    return Event(
        id=event_id,
        title=title,
        date=parse_date(draft.date),
        time=parse_time(draft.time),
        description=draft.description or "",
        recurrence=Recurrence.parse(draft.recurrence),
        custom_interval=parse_interval(draft.custom_interval),
        color=parse_color(draft.color),
    )


# ==================== Occurrences ====================

@dataclass(frozen=True)
class BaseKey:
    """Identity of the occurrence that is the base event itself."""
    id: str

    def __str__(self):
        return self.id


@dataclass(frozen=True)
class DerivedKey:
    """Identity of an occurrence generated from a recurring base event."""
    base_id: str
    date: date

    def __str__(self):
        return f"{self.base_id}@{self.date.isoformat()}"


OccurrenceKey = Union[BaseKey, DerivedKey]


@dataclass(frozen=True)
class Occurrence:
    """
    One calendar-visible appearance of an event.

    Delegates to self.event for everything except the date, which for
    derived occurrences differs from the base event's date.
    """
    event: Event
    date: date
    key: OccurrenceKey

    @property
    def id(self) -> OccurrenceKey:
        return self.key

    @property
    def is_recurring(self) -> bool:
        """True for occurrences generated from a series, False for the base itself."""
        return isinstance(self.key, DerivedKey)

    @property
    def original_id(self) -> Optional[str]:
        if isinstance(self.key, DerivedKey):
            return self.key.base_id
        return None

    @property
    def title(self) -> str:
        return self.event.title

    @property
    def time(self) -> Optional[str]:
        return self.event.time

    @property
    def description(self) -> str:
        return self.event.description

    @property
    def recurrence(self) -> Recurrence:
        return self.event.recurrence

    @property
    def custom_interval(self) -> int:
        return self.event.custom_interval

    @property
    def color(self) -> str:
        return self.event.color

    @property
    def all_day(self) -> bool:
        return self.event.all_day

    def with_date(self, new_date: date) -> 'Occurrence':
        """Same occurrence (same key) placed on another date; used as a move candidate."""
        return replace(self, date=new_date)

    def __repr__(self):
        return f"Occurrence(key={str(self.key)!r}, title={self.title!r}, date={self.date}, time={self.time!r})"


def create_base_occurrence(event: Event) -> Occurrence:
    return Occurrence(event=event, date=event.date, key=BaseKey(event.id))


def create_derived_occurrence(event: Event, on: date) -> Occurrence:
    return Occurrence(event=event, date=on, key=DerivedKey(event.id, on))


# ==================== Operation Results ====================

@dataclass(frozen=True)
class Committed:
    """A mutation went through; event is the stored result."""
    event: Event

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Conflict:
    """
    A mutation was blocked because the target slot is taken.

    Nothing was written. Replay the same call with force=True to apply it
    anyway.
    """
    conflicts: tuple[Occurrence, ...]

    @property
    def ok(self) -> bool:
        return False

    def __len__(self):
        return len(self.conflicts)

    def __iter__(self):
        return iter(self.conflicts)


ScheduleResult = Union[Committed, Conflict]
