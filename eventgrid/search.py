"""Case-insensitive text search over occurrences."""

from typing import Iterable

from .model import Occurrence


def matches(occurrence: Occurrence, term: str) -> bool:
    """True if term occurs in the title or description. A blank term matches everything."""
    needle = (term or "").strip().lower()
    if not needle:
        return True
    return needle in occurrence.title.lower() or needle in occurrence.description.lower()


def filter_occurrences(occurrences: Iterable[Occurrence], term: str) -> list[Occurrence]:
    return [occ for occ in occurrences if matches(occ, term)]
