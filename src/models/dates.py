"""
Month arithmetic for the scheduling engine.

The engine tracks everything as integer month offsets from the caller's
reference instant and only converts to calendar (year, month) pairs when an
appointment is produced.
"""

from __future__ import annotations

import calendar
from datetime import MAXYEAR, MINYEAR, date, datetime

from dateutil.relativedelta import relativedelta

MIN_YEAR = MINYEAR
MAX_YEAR = MAXYEAR


def as_date(value: date | datetime) -> date:
    """Drop the time component of a datetime; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def clamp_year(year: int) -> int:
    """Saturate a year to the supported calendar range."""
    return max(MIN_YEAR, min(MAX_YEAR, year))


def month_offset_to_year_month(now: date | datetime, mo: int) -> tuple[int, int]:
    """
    Convert a month offset relative to `now` into an absolute (year, month).

    Offset 0 is the month of `now`. Negative offsets count backwards. The
    month is always in 1..12; the year saturates at the calendar limits
    rather than overflowing.
    """
    # 0-based month index so floor division and modulo line up.
    month_index = now.month - 1 + mo
    year = now.year + month_index // 12
    month = month_index % 12 + 1
    return clamp_year(year), month


def months_between(earlier: date | datetime, later: date | datetime) -> int:
    """
    Whole months from `earlier` to `later`, rounded to the nearest month.

    A leftover of at least half of the following month rounds up. The result
    is negative when `later` precedes `earlier`.
    """
    earlier = as_date(earlier)
    later = as_date(later)
    delta = relativedelta(later, earlier)
    months = delta.years * 12 + delta.months
    if delta.days:
        pivot = earlier + relativedelta(months=months)
        month_length = calendar.monthrange(pivot.year, pivot.month)[1]
        if 2 * abs(delta.days) >= month_length:
            months += 1 if delta.days > 0 else -1
    return months


def month_name(month: int) -> str:
    """Full English month name for 1..12."""
    return calendar.month_name[month]
