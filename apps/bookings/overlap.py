"""Whole-day overlap test between a requested stay and existing bookings.

Every bound is widened to its calendar day (in the current timezone), so a
stay ending on a given day clashes with one starting that same day. By
default only the candidate's own start and end are tested against each
existing range: a candidate that strictly surrounds an existing booking is
not reported unless ``include_containment`` is set.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime

from django.utils import timezone  # type: ignore
from django.utils.dateparse import parse_date, parse_datetime  # type: ignore

from shared.domain.value_objects import DayRange


def _calendar_day(value) -> date:
    if isinstance(value, str):
        parsed = parse_datetime(value) or parse_date(value)
        if parsed is None:
            raise ValueError(f"Not a date: {value!r}")
        value = parsed
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date, datetime or ISO string, got {type(value).__name__}")


def _bounds(item) -> tuple:
    if isinstance(item, Mapping):
        return item["start_date"], item["end_date"]
    return item.start_date, item.end_date


def day_range(start, end) -> DayRange:
    """The whole-day range from ``start``'s day to ``end``'s day."""
    return DayRange.from_bounds(_calendar_day(start), _calendar_day(end))


def has_overlap(
    candidate_start,
    candidate_end,
    existing_ranges: Iterable,
    include_containment: bool = False,
) -> bool:
    """True when the candidate stay clashes with any of ``existing_ranges``.

    Each existing range is an object or mapping with ``start_date`` and
    ``end_date``. Which bookings to pass in (same room, paid, not ended) is
    up to the caller.
    """
    candidate = day_range(candidate_start, candidate_end)
    for item in existing_ranges:
        existing = day_range(*_bounds(item))
        if existing.contains(candidate.start) or existing.contains(candidate.end):
            return True
        if include_containment and candidate.surrounds(existing):
            return True
    return False


def booked_days(ranges: Iterable) -> list:
    """Sorted calendar days covered by any of ``ranges``."""
    days = set()
    for item in ranges:
        days.update(day_range(*_bounds(item)).days())
    return sorted(days)
