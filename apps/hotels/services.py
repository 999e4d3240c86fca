"""Pricing helpers for rooms."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from django.utils import timezone  # type: ignore


def _calendar_day(value) -> date:
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            return timezone.localtime(value).date()
        return value.date()
    return value


def nights_between(start, end) -> int:
    """Number of calendar days between two moments, ignoring time of day."""
    return (_calendar_day(end) - _calendar_day(start)).days


def quote_total_price(room, start, end, breakfast_included: bool = False) -> Decimal:
    """Total price of staying in ``room`` from ``start`` to ``end``.

    Each night costs the room price, plus the breakfast price when breakfast
    is included and the room offers it. A same-day stay is charged one room
    price without breakfast.
    """
    nights = nights_between(start, end)
    if nights <= 0:
        return Decimal(room.room_price)
    total = Decimal(nights) * Decimal(room.room_price)
    if breakfast_included and room.breakfast_price:
        total += Decimal(nights) * Decimal(room.breakfast_price)
    return total
