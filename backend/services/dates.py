"""Date arithmetic shared by the analysis components.

Day counts round half up, so 2.5 days is 3 and -2.5 days is -2.
"""

from __future__ import annotations

import calendar
import math
from datetime import UTC, datetime

SECONDS_PER_DAY = 86_400
DAYS_PER_YEAR = 365


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def utc_now() -> datetime:
    return datetime.now(UTC)


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days from ``earlier`` to ``later`` (negative if reversed)."""
    return round_half_up((later - earlier).total_seconds() / SECONDS_PER_DAY)


def days_since(moment: datetime, now: datetime) -> int:
    return days_between(now, moment)


def months_before(moment: datetime, months: int) -> datetime:
    """Same wall-clock time ``months`` calendar months earlier.

    The day is clamped to the target month's length (Mar 31 -> Feb 28).
    """
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month0 = divmod(month_index, 12)
    day = min(moment.day, calendar.monthrange(year, month0 + 1)[1])
    return moment.replace(year=year, month=month0 + 1, day=day)


def years_since(moment: datetime, now: datetime) -> float:
    """Elapsed 365-day years, rounded to one decimal."""
    years = (now - moment).total_seconds() / (SECONDS_PER_DAY * DAYS_PER_YEAR)
    return round_half_up(years * 10) / 10
