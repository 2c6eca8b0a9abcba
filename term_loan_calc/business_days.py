"""Business-day helpers used to place payment dates.

A business day is a weekday that is not a Canadian statutory holiday. Payment
dates landing on any other day roll forward to the next business day.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta

from .holidays import SATURDAY, SUNDAY, as_date, is_canadian_holiday

ONE_DAY = timedelta(days=1)


def is_weekend(value: date) -> bool:
    return value.weekday() in (SATURDAY, SUNDAY)


def is_business_day(value: date) -> bool:
    return not is_weekend(value) and not is_canadian_holiday(value)


def next_business_day(value: date) -> date:
    """Return the first business day strictly after ``value``."""
    candidate = value + ONE_DAY
    while not is_business_day(candidate):
        candidate += ONE_DAY
    return candidate


def adjust_payment_date(value: date) -> date:
    """Roll ``value`` forward to a business day.

    Business days are returned unchanged, so the adjustment is idempotent.
    Runs of weekends and holidays are walked one day at a time.
    """
    if is_business_day(value):
        return value
    return next_business_day(value)


def get_days_between(start: date, end: date) -> int:
    """Return the number of days from ``start`` to ``end``, rounded up.

    Plain dates give the exact calendar-day difference. Datetimes are compared
    as instants and any partial day counts as a whole day. A date mixed with a
    datetime is compared on calendar dates.
    """
    if isinstance(start, datetime) and isinstance(end, datetime):
        return math.ceil((end - start).total_seconds() / 86400)
    return (as_date(end) - as_date(start)).days
