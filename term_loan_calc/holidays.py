"""Canadian statutory holidays.

The holiday list covers the days banks in most provinces observe: fixed-date
holidays (some with a weekend observance shift), Monday holidays defined by
their position in the month, and the two Easter holidays. Easter Sunday is
computed with the anonymous Gregorian algorithm (Meeus/Jones/Butcher), which
is exact for every year from 1583 onwards.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from functools import lru_cache
from typing import FrozenSet, List

from .data_models import Holiday

MONDAY = 0
SATURDAY = 5
SUNDAY = 6

# Gregorian reform to the last year `date` supports
MIN_YEAR = 1583
MAX_YEAR = 9999


def easter_sunday(year: int) -> date:
    """Return the date of Easter Sunday in the Gregorian calendar."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = (h + l - 7 * m + 114) % 31 + 1
    return date(year, month, day)


def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """Return the ``n``-th ``weekday`` (Monday is 0) of a month.

    >>> nth_weekday(2024, 2, MONDAY, 3)
    datetime.date(2024, 2, 19)
    """
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + timedelta(days=offset + 7 * (n - 1))


def _monday_on_or_before(value: date) -> date:
    return value - timedelta(days=value.weekday())


def get_canadian_holidays(year: int) -> List[Holiday]:
    """Return the observed statutory holidays for ``year`` in calendar order.

    New Year's Day and Remembrance Day are never moved. Canada Day and
    Christmas falling on a Sunday are observed on the Monday; Boxing Day moves
    to Monday the 27th when it is a Sunday and to Monday the 28th when it is a
    Saturday.
    """
    easter = easter_sunday(year)

    canada_day = date(year, 7, 1)
    if canada_day.weekday() == SUNDAY:
        canada_day = date(year, 7, 2)

    christmas = date(year, 12, 25)
    if christmas.weekday() == SUNDAY:
        christmas = date(year, 12, 26)

    boxing_day = date(year, 12, 26)
    if boxing_day.weekday() == SUNDAY:
        boxing_day = date(year, 12, 27)
    elif boxing_day.weekday() == SATURDAY:
        boxing_day = date(year, 12, 28)

    return [
        Holiday("New Year's Day", date(year, 1, 1)),
        Holiday("Family Day", nth_weekday(year, 2, MONDAY, 3)),
        Holiday("Good Friday", easter - timedelta(days=2)),
        Holiday("Easter Monday", easter + timedelta(days=1)),
        Holiday("Victoria Day", _monday_on_or_before(date(year, 5, 25))),
        Holiday("Canada Day", canada_day),
        Holiday("Civic Holiday", nth_weekday(year, 8, MONDAY, 1)),
        Holiday("Labour Day", nth_weekday(year, 9, MONDAY, 1)),
        Holiday("Thanksgiving", nth_weekday(year, 10, MONDAY, 2)),
        Holiday("Remembrance Day", date(year, 11, 11)),
        Holiday("Christmas Day", christmas),
        Holiday("Boxing Day", boxing_day),
    ]


@lru_cache(maxsize=None)
def _holiday_dates(year: int) -> FrozenSet[date]:
    return frozenset(h.date for h in get_canadian_holidays(year))


def as_date(value: date) -> date:
    """Drop the time of day from a ``datetime``; plain dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_canadian_holiday(value: date) -> bool:
    """Return True if ``value`` falls on an observed holiday.

    Only the calendar date matters; a ``datetime`` at any time of day matches.
    """
    day = as_date(value)
    return day in _holiday_dates(day.year)
