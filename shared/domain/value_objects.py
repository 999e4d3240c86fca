"""
Common Value Objects

Value objects used across multiple domains:
- Money: Represents monetary amounts with currency
- DayRange: A booking period widened to whole calendar days
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject

SUPPORTED_CURRENCIES = ('usd', 'eur', 'inr', 'gbp')


def normalize_currency(code) -> str:
    """Lowercase ISO code, rejecting currencies the platform does not charge in."""
    normalized = (code or '').strip().lower()
    if not normalized:
        raise ValueError("Currency is required")
    if normalized not in SUPPORTED_CURRENCIES:
        raise ValueError(f"Unsupported currency: {code}")
    return normalized


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    Represents a monetary amount with a lowercase ISO currency code, the
    way the payment processor spells it.
    """
    amount: Decimal
    currency: str = 'usd'

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        normalize_currency(self.currency)

    @property
    def minor_units(self) -> int:
        """Amount in cents, as expected by the payment processor."""
        cents = (Decimal(self.amount) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
        return int(cents)

    def __add__(self, other: 'Money') -> 'Money':
        if not isinstance(other, Money):
            raise TypeError("Can only add Money to Money")
        if self.currency != other.currency:
            raise ValueError(f"Cannot add different currencies: {self.currency} and {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor) -> 'Money':
        if not isinstance(factor, (int, Decimal)):
            raise TypeError("Can only multiply Money by an integer or Decimal")
        return Money(self.amount * factor, self.currency)

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency.upper()}"

    def __repr__(self):
        return f"Money({self.amount}, '{self.currency}')"


def start_of_day(value) -> datetime:
    """Midnight of the calendar day ``value`` falls on, keeping its tzinfo."""
    if isinstance(value, datetime):
        return datetime.combine(value.date(), time.min, tzinfo=value.tzinfo)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def end_of_day(value) -> datetime:
    """Last representable instant of the calendar day ``value`` falls on."""
    if isinstance(value, datetime):
        return datetime.combine(value.date(), time.max, tzinfo=value.tzinfo)
    if isinstance(value, date):
        return datetime.combine(value, time.max)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


@dataclass(frozen=True)
class DayRange(ValueObject):
    """
    Whole-day range value object

    Built from any start/end moments, the range covers the start's calendar
    day from midnight through the end of the end's calendar day. Both bounds
    are inclusive, so two ranges sharing a calendar day always touch no
    matter the time of day.
    """
    start: datetime
    end: datetime

    @classmethod
    def from_bounds(cls, start_value, end_value) -> 'DayRange':
        return cls(start_of_day(start_value), end_of_day(end_value))

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Range start ({self.start}) must not be after its end ({self.end})")

    def contains(self, moment: datetime) -> bool:
        """Inclusive on both ends."""
        return self.start <= moment <= self.end

    def surrounds(self, other: 'DayRange') -> bool:
        """True when ``other`` lies strictly inside this range."""
        return self.start < other.start and self.end > other.end

    def days(self) -> list:
        """Each calendar day covered, in order."""
        current = self.start.date()
        last = self.end.date()
        covered = []
        while current <= last:
            covered.append(current)
            current = date.fromordinal(current.toordinal() + 1)
        return covered

    def __len__(self) -> int:
        return len(self.days())

    def __str__(self):
        return f"{self.start.strftime('%d.%m.%Y')} - {self.end.strftime('%d.%m.%Y')}"
