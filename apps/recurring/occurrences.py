"""
Date matching for recurring payments.

A payment falls on day ``d`` when ``d`` is on or after the start date, has
the same day-of-month, and lies a whole number of frequency steps (1, 6 or
12 months) after the start month. Days that don't exist in a month (the
31st in April, Feb 29 outside leap years) produce no occurrence there.
"""

import calendar
from datetime import date
from typing import Iterator, List, Optional

from .models import Frequency

FREQUENCY_MONTHS = {
    Frequency.MONTHLY: 1,
    Frequency.SEMI_ANNUAL: 6,
    Frequency.ANNUAL: 12,
}


def month_index(day: date) -> int:
    return day.year * 12 + (day.month - 1)


def _from_month_index(index: int, day_of_month: int) -> Optional[date]:
    year, month = divmod(index, 12)
    month += 1
    if day_of_month > calendar.monthrange(year, month)[1]:
        return None
    return date(year, month, day_of_month)


def occurs_on(start_date: date, frequency: str, day: date) -> bool:
    """Return True if a payment with this schedule falls on ``day``."""
    if day < start_date or day.day != start_date.day:
        return False
    step = FREQUENCY_MONTHS[frequency]
    return (month_index(day) - month_index(start_date)) % step == 0


def iter_occurrences(start_date: date, frequency: str, from_date: date) -> Iterator[date]:
    """Yield occurrences on or after ``from_date``, in order, up to ``date.max``."""
    step = FREQUENCY_MONTHS[frequency]
    base = month_index(start_date)
    first = max(from_date, start_date)

    # First candidate month aligned to the step
    offset = month_index(first) - base
    index = base + -(-offset // step) * step

    last_index = month_index(date.max)
    while index <= last_index:
        candidate = _from_month_index(index, start_date.day)
        if candidate is not None and candidate >= first:
            yield candidate
        index += step


def occurrences_between(start_date: date, frequency: str, range_start: date, range_end: date) -> List[date]:
    """All occurrence dates within ``[range_start, range_end]``."""
    if range_start > range_end:
        return []

    dates = []
    for candidate in iter_occurrences(start_date, frequency, range_start):
        if candidate > range_end:
            break
        dates.append(candidate)
    return dates


def next_occurrence(start_date: date, frequency: str, after: date) -> Optional[date]:
    """First occurrence on or after ``after``, or None past the last representable date."""
    return next(iter_occurrences(start_date, frequency, after), None)
